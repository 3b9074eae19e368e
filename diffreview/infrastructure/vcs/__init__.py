"""VCS backends - git and jj access behind one interface."""

from .base import VcsBackend, VcsCommandError, VcsError, VcsNotFoundError
from .factory import create_backend, detect_vcs
from .git_backend import GitBackend, parse_name_status
from .jj_backend import JjBackend, fileset_literal, parse_jj_status
from .runner import CommandResult, CommandRunner, SubprocessRunner

__all__ = [
    "CommandResult",
    "CommandRunner",
    "GitBackend",
    "JjBackend",
    "SubprocessRunner",
    "VcsBackend",
    "VcsCommandError",
    "VcsError",
    "VcsNotFoundError",
    "create_backend",
    "detect_vcs",
    "fileset_literal",
    "parse_jj_status",
    "parse_name_status",
]
