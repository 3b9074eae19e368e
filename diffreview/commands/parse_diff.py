"""Parse diff command.

Thin command that orchestrates diff parsing infrastructure.
Reads a raw diff body from stdin or a file and outputs its hunks with
per-line old/new numbering.
"""

from __future__ import annotations

import sys

from diffreview.domain.diff import parse_unified_diff
from diffreview.infrastructure.diff_io import (
    format_hunks_as_json,
    format_hunks_as_text,
    read_diff,
)


def cmd_parse_diff(
    input_file: str | None = None,
    output_format: str = "json",
) -> int:
    """Parse a unified diff and output structured hunk information.

    Args:
        input_file: Optional path to read diff from. If None, reads from stdin.
        output_format: Output format - 'json' (default) or 'text' for debugging

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    # --------------------------------------------------------
    # 1. Read diff input
    # --------------------------------------------------------
    try:
        diff_content = read_diff(input_file)
    except FileNotFoundError:
        print(f"Input file not found: {input_file}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Failed to read diff: {e}", file=sys.stderr)
        return 1

    # --------------------------------------------------------
    # 2. Parse into domain model
    # --------------------------------------------------------
    hunks = parse_unified_diff(diff_content.split("\n"))

    # --------------------------------------------------------
    # 3. Output in requested format
    # --------------------------------------------------------
    if output_format == "text":
        print(format_hunks_as_text(hunks))
    else:
        print(format_hunks_as_json(hunks))

    return 0
