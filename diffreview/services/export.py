"""Markdown export of review comments.

Produces a markdown document grouping comments by file, suitable for pasting
into a pull request or handing to another tool as review feedback.
"""

from __future__ import annotations

from pathlib import Path

from diffreview.domain.review import Comment, ReviewSession, Side

REF_DISPLAY_LENGTH = 8


# ============================================================
# Public API
# ============================================================


def to_markdown(session: ReviewSession, repo_name: str, ref: str) -> str:
    """Render a session's comments as markdown.

    Files are sorted alphabetically; within a file, file-level comments come
    first and line comments follow in line order.

    Args:
        session: Review session to export
        repo_name: Repository name shown in the title
        ref: Commit SHA or change ID (shortened in the title)

    Returns:
        Markdown document
    """
    lines = [f"# Code Review: {repo_name} @ {ref[:REF_DISPLAY_LENGTH]}", ""]

    comments_by_file: dict[str, list[Comment]] = {}
    for comment in session.comments:
        comments_by_file.setdefault(comment.file, []).append(comment)

    for file in sorted(comments_by_file):
        file_comments = sorted(comments_by_file[file], key=lambda c: c.line or 0)

        lines.append(f"## {file}")
        lines.append("")

        for comment in file_comments:
            lines.append(f"**[{comment.type.value.upper()}]** {format_location(comment)}")
            lines.append("")
            for text_line in comment.text.split("\n"):
                lines.append(f"> {text_line}")
            lines.append("")

    return "\n".join(lines)


def format_location(comment: Comment) -> str:
    """Describe where a comment is anchored.

    Old-side line numbers refer to the pre-change file, so they are marked
    as approximate.
    """
    if comment.line is None:
        return "(file-level)"
    if comment.side == Side.OLD:
        return f"Line ~{comment.line} (deleted)"
    return f"Line {comment.line}"


def write_markdown(session: ReviewSession, repo_name: str, ref: str, output_path: str | Path) -> Path:
    """Write the markdown export to a file.

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(output_path)
    path.write_text(to_markdown(session, repo_name, ref))
    return path
