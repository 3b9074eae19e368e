"""Status command for displaying review progress.

Refreshes the review session against the working copy, saves it, and shows
each changed file with its reviewed marker, overall progress, comment counts,
and any files whose review state was reset because their diff changed.
"""

from __future__ import annotations

import sys

from diffreview.infrastructure.config import ConfigError
from diffreview.infrastructure.storage import SessionStorageError
from diffreview.infrastructure.vcs import VcsError

from .session import open_review_service


def cmd_status(repo_dir: str = ".", config_path: str | None = None) -> int:
    """Show review status for a repository.

    Args:
        repo_dir: Directory inside the repository
        config_path: Optional config file path

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        service, result = open_review_service(repo_dir, config_path)
        service.save()
    except (ConfigError, VcsError, SessionStorageError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    backend = service.backend
    session = service.session
    branch = f" ({backend.branch})" if backend.branch else ""
    print(f"{backend.vcs_type.display_name} repository: {backend.root}{branch}")
    print(f"Ref: {backend.ref}")
    print()

    if not result.files:
        print("No changes to review")
        return 0

    for file in result.files:
        marker = "[x]" if file.reviewed else "[ ]"
        comment_count = len(session.get_file_comments(file.path))
        suffix = f"  ({comment_count} comment{'s' if comment_count != 1 else ''})" if comment_count else ""
        rename = f"{file.old_path} -> " if file.old_path else ""
        print(f"  {marker} {file.status} {rename}{file.path}{suffix}")

    reviewed, total = session.get_progress()
    counts = session.get_comment_counts()
    print()
    print(f"Reviewed: {reviewed}/{total}")
    print("Comments: " + ", ".join(f"{t.value} {n}" for t, n in counts.items()))

    if result.has_resets:
        print()
        print(
            f"{len(result.reset_files)} file(s) changed and were reset: "
            + ", ".join(result.reset_files)
        )

    return 0
