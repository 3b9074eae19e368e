"""Jujutsu VCS backend.

Implements the VcsBackend interface for jj repositories. Changes are those
of the working-copy change (``@``).
"""

from __future__ import annotations

import logging
import re

from diffreview.domain.rename import expand_rename_path
from diffreview.domain.vcs import VcsFileChange, VcsType

from .base import VcsBackend, VcsCommandError, VcsNotFoundError
from .runner import CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)

_STATUS_LINE_PATTERN = re.compile(r"^([MADR])\s+(.+)$")

# Parsed output must be free of pager and ANSI color escapes
PLAIN_OUTPUT_FLAGS = ["--no-pager", "--color", "never"]


class JjBackend(VcsBackend):
    """VCS backend for Jujutsu repositories."""

    vcs_type = VcsType.JJ

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def open(cls, directory: str, runner: CommandRunner | None = None) -> JjBackend:
        """Open the jj repository containing a directory.

        Raises:
            VcsNotFoundError: If the directory is not in a jj repository
        """
        runner = runner or SubprocessRunner()

        root_result = runner.run(["jj", "root", "--no-pager"], directory)
        if not root_result.success:
            raise VcsNotFoundError(f"Not a jj repository: {directory}")

        backend = cls(root=root_result.output, runner=runner)
        backend.refresh()
        return backend

    # --------------------------------------------------------
    # Backend Interface
    # --------------------------------------------------------

    def refresh(self) -> None:
        """Re-read the working-copy change ID and its bookmarks."""
        ref_result = self.runner.run(_log_command("change_id"), self.root)
        if ref_result.success:
            self.ref = ref_result.output

        branch_result = self.runner.run(_log_command("bookmarks"), self.root)
        if branch_result.success:
            self.branch = branch_result.output or None

    def get_changed_files(self) -> list[VcsFileChange]:
        try:
            output = self._run(["jj", "status", *PLAIN_OUTPUT_FLAGS])
        except VcsCommandError as e:
            logger.error("Failed to get changed files: %s", e)
            return []

        return parse_jj_status(output)

    def get_file_diff_raw(self, file_path: str) -> str | None:
        result = self.runner.run(["jj", "diff", *PLAIN_OUTPUT_FLAGS, "--git", fileset_literal(file_path)], self.root)
        if not result.success:
            return None
        return result.stdout


def _log_command(template: str) -> list[str]:
    return ["jj", "log", *PLAIN_OUTPUT_FLAGS, "--no-graph", "-r", "@", "-T", template, "--limit", "1"]


def fileset_literal(path: str) -> str:
    """Quote a path as a jj fileset literal so glob characters are not expanded."""
    escaped = path.replace("\\", "\\\\").replace('"', '\\"')
    return f'file:"{escaped}"'


def parse_jj_status(output: str) -> list[VcsFileChange]:
    """Parse ``jj status`` output into changed files.

    The "Working copy" and "Parent commit" summary lines are skipped.
    Renames use the compact ``{old => new}`` form and are expanded.
    """
    files: list[VcsFileChange] = []

    for line in output.splitlines():
        if line.startswith(("Working copy", "Parent commit")):
            continue

        match = _STATUS_LINE_PATTERN.match(line)
        if not match:
            continue

        status, path = match.groups()
        if status == "R":
            old_path, new_path = expand_rename_path(path)
            files.append(VcsFileChange(status="R", path=new_path, old_path=old_path))
        else:
            files.append(VcsFileChange(status=status, path=path))

    return files
