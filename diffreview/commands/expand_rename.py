"""Expand rename command.

Prints the old and new paths encoded in a compact rename path such as
``src/{old => new}/main.py``.
"""

from __future__ import annotations

from diffreview.domain.rename import expand_rename_path


def cmd_expand_rename(path: str) -> int:
    """Print the old path and the new path, one per line.

    Returns:
        Exit code (always 0; paths without rename notation print twice)
    """
    old_path, new_path = expand_rename_path(path)
    print(old_path)
    print(new_path)
    return 0
