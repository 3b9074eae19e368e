"""Factory for creating VCS backends.

This module detects which version control system manages a directory and
creates the matching backend.
"""

from __future__ import annotations

import logging
from pathlib import Path

from diffreview.domain.vcs import VcsType

from .base import VcsBackend, VcsNotFoundError
from .git_backend import GitBackend
from .jj_backend import JjBackend
from .runner import CommandRunner

logger = logging.getLogger(__name__)


def detect_vcs(directory: str | Path) -> tuple[VcsType, Path] | None:
    """Walk up from a directory until a repository marker is found.

    A ``.jj`` directory wins over ``.git`` because colocated jj repos also
    contain a git directory. A ``.git`` file (worktrees, submodules) counts
    as git.

    Args:
        directory: Directory to start from

    Returns:
        (vcs_type, repository_root), or None if no repository was found
    """
    current = Path(directory).resolve()

    for candidate in (current, *current.parents):
        if (candidate / ".jj").is_dir():
            logger.debug("Detected jj repository at: %s", candidate)
            return VcsType.JJ, candidate

        git_marker = candidate / ".git"
        if git_marker.is_dir() or git_marker.is_file():
            logger.debug("Detected git repository at: %s", candidate)
            return VcsType.GIT, candidate

    return None


def create_backend(
    directory: str | Path = ".",
    vcs_type: VcsType = VcsType.AUTO,
    runner: CommandRunner | None = None,
) -> VcsBackend:
    """Create a backend for the repository containing a directory.

    Args:
        directory: Directory inside the repository (default: current directory)
        vcs_type: AUTO to detect, or force GIT / JJ
        runner: Command runner (injected; defaults to subprocess)

    Returns:
        VcsBackend implementation for the detected or requested VCS

    Raises:
        VcsNotFoundError: If no supported repository contains the directory

    Examples:
        >>> backend = create_backend("/path/to/repo")
        >>> backend = create_backend("/path/to/repo", VcsType.GIT)
    """
    if vcs_type == VcsType.AUTO:
        detected = detect_vcs(directory)
        if detected is None:
            raise VcsNotFoundError(f"No git or jj repository found for: {directory}")
        vcs_type, _root = detected

    if vcs_type == VcsType.JJ:
        return JjBackend.open(str(directory), runner)
    elif vcs_type == VcsType.GIT:
        return GitBackend.open(str(directory), runner)
    else:
        raise ValueError(f"Unknown VCS type: {vcs_type}")
