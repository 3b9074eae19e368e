"""JSON session storage.

Review sessions are stored as one JSON file per repository under the data
directory. The file name is derived from a hash of the repository root so
sessions for different checkouts never collide.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
from pathlib import Path

from diffreview.domain.review import ReviewSession

logger = logging.getLogger(__name__)

APP_DIR_NAME = "diffreview"


class SessionStorageError(Exception):
    """Raised when a session cannot be written."""

    pass


def default_data_dir() -> Path:
    """$XDG_DATA_HOME/diffreview, else ~/.local/share/diffreview."""
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".local" / "share" / APP_DIR_NAME


class SessionStore:
    """Reads and writes ReviewSession JSON files."""

    def __init__(self, data_dir: str | Path | None = None):
        """Initialize with the storage directory.

        Args:
            data_dir: Directory for session files (default: XDG data dir)
        """
        self.data_dir = Path(data_dir) if data_dir else default_data_dir()

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def session_path(self, repo_root: str) -> Path:
        digest = hashlib.sha256(repo_root.encode("utf-8")).hexdigest()[:16]
        return self.data_dir / f"{digest}.json"

    def load(self, repo_root: str) -> ReviewSession | None:
        """Load the stored session for a repository.

        Unreadable or corrupt files are logged and treated as absent.

        Returns:
            The stored session, or None
        """
        path = self.session_path(repo_root)
        if not path.exists():
            return None

        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to read session file %s: %s", path, e)
            return None

        try:
            return ReviewSession.from_dict(data)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning("Ignoring malformed session file %s: %s", path, e)
            return None

    def load_or_create(self, repo_root: str, base_ref: str) -> ReviewSession:
        """Load the stored session if it was made against the same base ref.

        Args:
            repo_root: Repository root path
            base_ref: Current commit SHA or change ID

        Returns:
            The stored session, or a new empty one
        """
        session = self.load(repo_root)
        if session is not None:
            if session.base_ref == base_ref:
                logger.info("Loaded existing session for %s", repo_root)
                return session
            logger.info(
                "Session base_ref mismatch (expected %s, got %s), creating new session",
                base_ref,
                session.base_ref,
            )

        return ReviewSession(repo_root=repo_root, base_ref=base_ref)

    def save(self, session: ReviewSession) -> Path:
        """Write a session to disk, updating its timestamp.

        Returns:
            Path of the written file

        Raises:
            SessionStorageError: If the file cannot be written
        """
        session.touch()
        path = self.session_path(session.repo_root)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(session.to_dict(), indent=2))
        except OSError as e:
            raise SessionStorageError(f"Failed to write session file {path}: {e}")
        return path
