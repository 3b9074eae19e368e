"""Infrastructure for reading and formatting diff bodies.

Handles reading raw diff content from stdin or files and converting parsed
hunks to JSON or text output.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

from diffreview.domain.diff import Hunk


# ============================================================
# Input Functions
# ============================================================


def read_diff_from_stdin() -> str:
    return sys.stdin.read()


def read_diff_from_file(path: str | Path) -> str:
    """Read diff content from a file.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    with open(path) as f:
        return f.read()


def read_diff(input_file: str | None = None) -> str:
    """Read diff content from stdin or a file.

    Args:
        input_file: Optional path to read from. If None, reads from stdin.

    Returns:
        Raw diff content as a string
    """
    if input_file is None:
        return read_diff_from_stdin()
    return read_diff_from_file(input_file)


# ============================================================
# Output Functions
# ============================================================


def format_hunks_as_json(hunks: list[Hunk]) -> str:
    return json.dumps({"hunks": [hunk.to_dict() for hunk in hunks]}, indent=2)


def format_hunks_as_text(hunks: list[Hunk]) -> str:
    """Format hunks as human-readable text for debugging.

    Returns:
        Text showing each hunk's line ranges and whether its line counts
        match its header
    """
    if not hunks:
        return "Empty diff (no hunks found)"

    lines = [f"Total hunks: {len(hunks)}", ""]

    for i, hunk in enumerate(hunks, 1):
        lines.append(f"Hunk {i}: {hunk.header}")
        lines.append(f"  Old: lines {hunk.old_start}-{hunk.old_start + hunk.old_count - 1} ({hunk.old_count} lines)")
        lines.append(f"  New: lines {hunk.new_start}-{hunk.new_start + hunk.new_count - 1} ({hunk.new_count} lines)")
        if not hunk.is_consistent:
            lines.append(
                f"  Warning: header counts do not match body "
                f"(old {hunk.old_line_total}, new {hunk.new_line_total})"
            )
        lines.append("")

    return "\n".join(lines)
