"""Comment command.

Adds a review comment to a changed file, optionally anchored to one line on
one side of its diff, and saves the session.
"""

from __future__ import annotations

import sys

from diffreview.domain.review import CommentType, Side
from diffreview.infrastructure.config import ConfigError
from diffreview.infrastructure.storage import SessionStorageError
from diffreview.infrastructure.vcs import VcsError

from .session import open_review_service


def cmd_comment(
    path: str,
    text: str,
    repo_dir: str = ".",
    line: int | None = None,
    side: str | None = None,
    comment_type: str = "note",
    config_path: str | None = None,
) -> int:
    """Add a comment to a file.

    Args:
        path: File path relative to the repository root
        text: Comment text
        repo_dir: Directory inside the repository
        line: Line number, for a line comment
        side: "old" or "new", required with line
        comment_type: note, suggestion, issue or praise
        config_path: Optional config file path

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        parsed_type = CommentType.from_string(comment_type)
        parsed_side = Side(side) if side else None
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        service, _result = open_review_service(repo_dir, config_path)
        if service.session.get_file_state(path) is None:
            print(f"Not a changed file: {path}", file=sys.stderr)
            return 1
        comment = service.add_comment(path, text, parsed_type, line=line, side=parsed_side)
        service.save()
    except (ConfigError, VcsError, SessionStorageError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Added {comment.type.value} {comment.id} to {path}")
    return 0
