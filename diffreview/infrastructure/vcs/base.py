"""Abstract base class for VCS backends.

A backend knows how to talk to one version control tool. Subclasses
implement refresh(), get_changed_files() and get_file_diff_raw(); the shared
logic here turns raw per-file diff output into FileDiff models.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from diffreview.domain.diff import FileDiff, FileStatus
from diffreview.domain.vcs import VcsFileChange, VcsType

from .runner import CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)


class VcsError(Exception):
    """Base class for VCS backend errors."""

    pass


class VcsNotFoundError(VcsError):
    """Raised when a directory is not inside a supported repository."""

    pass


class VcsCommandError(VcsError):
    """Raised when a VCS command fails."""

    pass


class VcsBackend(ABC):
    """Abstract base class for VCS backends.

    Attributes:
        root: Repository root directory
        ref: Current reference (commit SHA for git, change ID for jj)
        branch: Current branch or bookmarks, None when detached
    """

    vcs_type: VcsType

    def __init__(
        self,
        root: str,
        ref: str = "",
        branch: str | None = None,
        runner: CommandRunner | None = None,
    ):
        """Initialize with repository state.

        Args:
            root: Repository root directory
            ref: Current reference
            branch: Current branch name, if any
            runner: Command runner (injected; defaults to subprocess)
        """
        self.root = root
        self.ref = ref
        self.branch = branch
        self.runner = runner or SubprocessRunner()

    # --------------------------------------------------------
    # Backend Interface
    # --------------------------------------------------------

    @abstractmethod
    def refresh(self) -> None:
        """Re-read the current reference and branch from the VCS."""
        pass

    @abstractmethod
    def get_changed_files(self) -> list[VcsFileChange]:
        """List files changed in the working copy.

        Returns:
            Changed files; empty if the VCS command failed
        """
        pass

    @abstractmethod
    def get_file_diff_raw(self, file_path: str) -> str | None:
        """Get raw diff output for one file.

        Args:
            file_path: File path relative to the repository root

        Returns:
            Raw diff text ("" when unchanged), or None if the command failed
        """
        pass

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @property
    def repo_name(self) -> str:
        return Path(self.root).name

    def has_changes(self) -> bool:
        return bool(self.get_changed_files())

    def get_file_diff(self, file_path: str) -> FileDiff | None:
        """Get the parsed diff for one file.

        Args:
            file_path: File path relative to the repository root

        Returns:
            FileDiff (status defaults to M until the caller sets it), or None
            if the diff could not be fetched
        """
        raw = self.get_file_diff_raw(file_path)
        if raw is None:
            logger.error("Failed to get diff for %s", file_path)
            return None
        return FileDiff.from_raw_diff(file_path, raw)

    def get_all_diffs(self) -> list[FileDiff]:
        """Get parsed diffs for every changed file, skipping failures."""
        diffs: list[FileDiff] = []
        for change in self.get_changed_files():
            diff = self.get_file_diff(change.path)
            if diff is None:
                continue
            diff.status = FileStatus.coerce(change.status)
            diff.old_path = change.old_path
            diffs.append(diff)
        return diffs

    # --------------------------------------------------------
    # Helpers
    # --------------------------------------------------------

    def _run(self, cmd: list[str], cwd: str | None = None) -> str:
        """Run a command and return trimmed stdout.

        Raises:
            VcsCommandError: If the command fails
        """
        result = self.runner.run(cmd, cwd or self.root)
        if not result.success:
            raise VcsCommandError(f"Command failed: {' '.join(cmd)}\n{result.stderr.strip()}")
        return result.output

