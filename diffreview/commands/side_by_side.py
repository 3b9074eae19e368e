"""Side-by-side command.

Thin command that parses a raw diff body and prints it as two aligned
columns, old on the left and new on the right.
"""

from __future__ import annotations

import sys

from diffreview.domain.diff import FileDiff
from diffreview.domain.side_by_side import format_rows, to_side_by_side
from diffreview.infrastructure.diff_io import read_diff


def cmd_side_by_side(input_file: str | None = None, width: int = 40) -> int:
    """Print a diff as side-by-side columns.

    Args:
        input_file: Optional path to read diff from. If None, reads from stdin.
        width: Width of each content column

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    if width < 1:
        print(f"Column width must be positive: {width}", file=sys.stderr)
        return 1

    try:
        diff_content = read_diff(input_file)
    except FileNotFoundError:
        print(f"Input file not found: {input_file}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Failed to read diff: {e}", file=sys.stderr)
        return 1

    diff = FileDiff.from_raw_diff(input_file or "-", diff_content)
    if diff.is_binary:
        print("Binary file, no textual diff")
        return 0
    if diff.is_empty:
        print("No changes")
        return 0

    print(format_rows(to_side_by_side(diff.hunks), width=width))
    return 0
