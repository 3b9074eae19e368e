"""Review orchestration service.

Core service that ties a VCS backend, a review session and the diff cache
together. It is the only place that decides when cached diffs are dropped
and when review state is invalidated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from diffreview.domain.diff import FileDiff, FileStatus
from diffreview.domain.review import Comment, CommentType, ReviewSession, Side
from diffreview.domain.side_by_side import AlignedRow, to_side_by_side
from diffreview.domain.vcs import VcsFileChange
from diffreview.infrastructure.config import DiffReviewConfig
from diffreview.infrastructure.storage import SessionStore
from diffreview.infrastructure.vcs import VcsBackend, create_backend

from .diff_cache import DiffCache

logger = logging.getLogger(__name__)


@dataclass
class ReviewFile:
    """A changed file as presented to the reviewer."""

    path: str
    status: str
    reviewed: bool
    old_path: str | None = None


@dataclass
class RefreshResult:
    """Outcome of re-reading the working copy."""

    files: list[ReviewFile] = field(default_factory=list)
    reset_files: list[str] = field(default_factory=list)

    @property
    def has_resets(self) -> bool:
        return bool(self.reset_files)


class ReviewService:
    """Service for running a review over a repository's working-copy changes.

    Receives its collaborators via constructor injection. Single-threaded:
    refresh() and file reads must not overlap.
    """

    def __init__(
        self,
        backend: VcsBackend,
        session: ReviewSession,
        store: SessionStore | None = None,
        cache: DiffCache | None = None,
    ):
        """Initialize with dependencies.

        Args:
            backend: VCS backend for the repository (injected)
            session: Review session holding file state and comments
            store: Session store; None keeps the session in memory only
            cache: Parsed diff cache (default: a new empty cache)
        """
        self.backend = backend
        self.session = session
        self.store = store
        self.cache = cache or DiffCache()
        self._changes: dict[str, VcsFileChange] = {}
        self._raw_diffs: dict[str, str] = {}

    # ============================================================
    # Factory Methods
    # ============================================================

    @classmethod
    def create(cls, directory: str | Path, config: DiffReviewConfig) -> ReviewService:
        """Create a service for the repository containing a directory.

        Raises:
            VcsNotFoundError: If no supported repository contains the directory
        """
        backend = create_backend(directory, config.vcs)

        if config.persist_sessions:
            store = SessionStore(config.data_dir)
            session = store.load_or_create(backend.root, backend.ref)
        else:
            store = None
            session = ReviewSession(repo_root=backend.root, base_ref=backend.ref)

        return cls(backend=backend, session=session, store=store)

    # ============================================================
    # Public API - Refresh
    # ============================================================

    def refresh(self) -> RefreshResult:
        """Re-read changed files and reconcile review state with them.

        Every cached diff is dropped. Each file's raw diff is fingerprinted;
        files whose diff changed lose their reviewed flag and comments.

        Returns:
            Current files and the paths that were reset
        """
        self.cache.clear()
        self._changes = {}
        self._raw_diffs = {}
        result = RefreshResult()

        for change in self.backend.get_changed_files():
            raw = self.backend.get_file_diff_raw(change.path)
            if raw is not None:
                self._raw_diffs[change.path] = raw
            self._changes[change.path] = change

            if self.session.ensure_file(change.path, change.status, raw):
                result.reset_files.append(change.path)

            result.files.append(
                ReviewFile(
                    path=change.path,
                    status=change.status,
                    reviewed=self.session.is_file_reviewed(change.path),
                    old_path=change.old_path,
                )
            )

        if result.reset_files:
            logger.info(
                "%d file(s) changed and were reset: %s",
                len(result.reset_files),
                ", ".join(result.reset_files),
            )

        return result

    # ============================================================
    # Public API - Diffs
    # ============================================================

    def get_file_diff(self, path: str) -> FileDiff | None:
        """Get the parsed diff for a file, from cache when possible.

        The diff is parsed from the same raw text that was fingerprinted
        during the last refresh, so it always matches the review state. Text
        that was not fetched during refresh is never fetched here.

        Returns:
            FileDiff, or None if the file had no diff text at the last refresh
        """
        cached = self.cache.get(path)
        if cached is not None:
            return cached

        raw = self._raw_diffs.get(path)
        if raw is None:
            logger.warning("No refreshed diff for %s, refresh before viewing it", path)
            return None

        change = self._changes[path]
        diff = FileDiff.from_raw_diff(
            path,
            raw,
            status=FileStatus.coerce(change.status),
            old_path=change.old_path,
        )
        self.cache.put(diff)
        return diff

    def get_side_by_side(self, path: str) -> list[AlignedRow]:
        """Get aligned rows for a file (empty for binary or unchanged files)."""
        diff = self.get_file_diff(path)
        if diff is None:
            return []
        return to_side_by_side(diff.hunks)

    # ============================================================
    # Public API - Review State
    # ============================================================

    def set_reviewed(self, path: str, reviewed: bool = True) -> bool:
        """Set a file's reviewed flag.

        Returns:
            False if the file is not tracked in the session
        """
        if self.session.get_file_state(path) is None:
            return False
        self.session.set_file_reviewed(path, reviewed)
        return True

    def add_comment(
        self,
        path: str,
        text: str,
        comment_type: CommentType = CommentType.NOTE,
        line: int | None = None,
        side: Side | None = None,
    ) -> Comment:
        """Add a comment to a file, or to one line on one side of it.

        Raises:
            ValueError: If only one of line and side is given, or the text
                is empty
        """
        if (line is None) != (side is None):
            raise ValueError("line and side must be given together")
        if not text.strip():
            raise ValueError("Comment text must not be empty")
        return self.session.add_comment(path, comment_type, text, line=line, side=side)

    def save(self) -> Path | None:
        """Persist the session if a store is configured.

        Returns:
            Path of the written session file, or None when not persisting
        """
        if self.store is None:
            self.session.touch()
            return None
        return self.store.save(self.session)
