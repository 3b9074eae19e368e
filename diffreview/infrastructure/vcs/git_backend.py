"""Git VCS backend.

Implements the VcsBackend interface for git repositories. Changes are the
working tree compared against HEAD.
"""

from __future__ import annotations

import logging
import re

from diffreview.domain.vcs import VcsFileChange, VcsType

from .base import VcsBackend, VcsCommandError, VcsNotFoundError
from .runner import CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)

_NAME_STATUS_PATTERN = re.compile(r"^(\S+)\s+(.+)$")


class GitBackend(VcsBackend):
    """VCS backend for git repositories."""

    vcs_type = VcsType.GIT

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def open(cls, directory: str, runner: CommandRunner | None = None) -> GitBackend:
        """Open the git repository containing a directory.

        Args:
            directory: Any directory inside the repository
            runner: Command runner (injected; defaults to subprocess)

        Returns:
            GitBackend rooted at the repository top level

        Raises:
            VcsNotFoundError: If the directory is not in a git repository
        """
        runner = runner or SubprocessRunner()

        if not runner.run(["git", "rev-parse", "--git-dir"], directory).success:
            raise VcsNotFoundError(f"Not a git repository: {directory}")

        root_result = runner.run(["git", "rev-parse", "--show-toplevel"], directory)
        if not root_result.success:
            raise VcsNotFoundError(
                f"Failed to get repository root for {directory}: {root_result.stderr.strip()}"
            )

        backend = cls(root=root_result.output, runner=runner)
        backend.refresh()
        return backend

    # --------------------------------------------------------
    # Backend Interface
    # --------------------------------------------------------

    def refresh(self) -> None:
        """Re-read HEAD and the current branch."""
        head_result = self.runner.run(["git", "rev-parse", "HEAD"], self.root)
        if head_result.success:
            self.ref = head_result.output

        branch_result = self.runner.run(["git", "branch", "--show-current"], self.root)
        if branch_result.success:
            self.branch = branch_result.output or None

    def get_changed_files(self) -> list[VcsFileChange]:
        """List files changed in the working tree relative to HEAD."""
        try:
            output = self._run(["git", "diff", "--no-color", "--name-status", "HEAD"])
        except VcsCommandError as e:
            logger.error("Failed to get changed files: %s", e)
            return []

        return parse_name_status(output)

    def get_file_diff_raw(self, file_path: str) -> str | None:
        result = self.runner.run(["git", "diff", "--no-color", "HEAD", "--", file_path], self.root)
        if not result.success:
            return None
        return result.stdout


def parse_name_status(output: str) -> list[VcsFileChange]:
    """Parse ``git diff --name-status`` output.

    Scored codes are normalised to one character. Renames
    (``R100<TAB>old<TAB>new``) carry both paths.

    Examples:
        >>> parse_name_status("M\\tsrc/app.py")
        [VcsFileChange(status='M', path='src/app.py', old_path=None)]
    """
    files: list[VcsFileChange] = []

    for line in output.splitlines():
        match = _NAME_STATUS_PATTERN.match(line)
        if not match:
            continue

        status, path = match.groups()
        if status.startswith("R"):
            parts = path.split("\t") if "\t" in path else path.rsplit(None, 1)
            if len(parts) == 2:
                files.append(VcsFileChange(status="R", path=parts[1].strip(), old_path=parts[0].strip()))
            else:
                files.append(VcsFileChange(status="R", path=path))
        else:
            files.append(VcsFileChange(status=status[0], path=path))

    return files
