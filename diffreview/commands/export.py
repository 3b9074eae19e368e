"""Export command.

Writes the review comments of a repository's session as markdown, to a file
or to stdout.
"""

from __future__ import annotations

import sys

from diffreview.infrastructure.config import ConfigError
from diffreview.infrastructure.storage import SessionStorageError
from diffreview.infrastructure.vcs import VcsError
from diffreview.services.export import to_markdown, write_markdown

from .session import open_review_service


def cmd_export(
    repo_dir: str = ".",
    output_file: str | None = None,
    config_path: str | None = None,
) -> int:
    """Export review comments as markdown.

    The session is refreshed and saved first, so comments invalidated by diff
    changes are neither exported nor left in the stored session.

    Args:
        repo_dir: Directory inside the repository
        output_file: Path to write to. If None, prints to stdout.
        config_path: Optional config file path

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        service, _result = open_review_service(repo_dir, config_path)
        service.save()
    except (ConfigError, VcsError, SessionStorageError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    backend = service.backend
    if not service.session.has_comments:
        print("No comments to export", file=sys.stderr)

    if output_file is None:
        print(to_markdown(service.session, backend.repo_name, backend.ref))
        return 0

    try:
        path = write_markdown(service.session, backend.repo_name, backend.ref, output_file)
    except OSError as e:
        print(f"Failed to write {output_file}: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {path}")
    return 0
