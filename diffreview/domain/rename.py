"""Rename path expansion.

jj (and git with --compact-summary style output) compresses renames into a
single path such as ``src/{old => new}/main.py``. This module expands that
notation into separate old and new paths.
"""

from __future__ import annotations

import re

RENAME_PATTERN = re.compile(r"^(.*?)\{(.*?)\s*=>\s*(.*?)\}(.*)$")
REPEATED_SEPARATOR_PATTERN = re.compile(r"/{2,}")


def expand_rename_path(path: str) -> tuple[str, str]:
    """Expand a ``prefix{old => new}suffix`` path into (old_path, new_path).

    Either side of the braces may be empty, in which case that segment is
    dropped and any doubled separator left behind is collapsed.

    Examples:
        >>> expand_rename_path("path/to/{old => new}/file.py")
        ('path/to/old/file.py', 'path/to/new/file.py')
        >>> expand_rename_path("pkg/x/{git => }/diff.py")
        ('pkg/x/git/diff.py', 'pkg/x/diff.py')
        >>> expand_rename_path("simple/path.py")
        ('simple/path.py', 'simple/path.py')
    """
    match = RENAME_PATTERN.match(path)
    if not match:
        return path, path

    prefix, old_part, new_part, suffix = match.groups()
    old_part = old_part.strip()
    new_part = new_part.strip()

    old_path = prefix + old_part + suffix if old_part else prefix + suffix
    new_path = prefix + new_part + suffix if new_part else prefix + suffix

    return _collapse_separators(old_path), _collapse_separators(new_path)


def _collapse_separators(path: str) -> str:
    return REPEATED_SEPARATOR_PATTERN.sub("/", path)
