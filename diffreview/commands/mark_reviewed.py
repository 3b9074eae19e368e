"""Mark reviewed command.

Sets or clears the reviewed flag of one changed file and saves the session.
"""

from __future__ import annotations

import sys

from diffreview.infrastructure.config import ConfigError
from diffreview.infrastructure.storage import SessionStorageError
from diffreview.infrastructure.vcs import VcsError

from .session import open_review_service


def cmd_mark_reviewed(
    path: str,
    repo_dir: str = ".",
    unset: bool = False,
    config_path: str | None = None,
) -> int:
    """Mark a file as reviewed (or not reviewed).

    Args:
        path: File path relative to the repository root
        repo_dir: Directory inside the repository
        unset: Clear the flag instead of setting it
        config_path: Optional config file path

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        service, _result = open_review_service(repo_dir, config_path)
        if not service.set_reviewed(path, not unset):
            print(f"Not a changed file: {path}", file=sys.stderr)
            return 1
        service.save()
    except (ConfigError, VcsError, SessionStorageError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{'Unmarked' if unset else 'Marked'} {path} as reviewed")
    return 0
