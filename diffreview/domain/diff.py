"""Domain models for unified diff parsing.

Parse-once pattern: Raw diff text from the VCS is parsed into type-safe models
at the boundary. Provides DiffLine, Hunk and FileDiff models plus the
parse_unified_diff() entry point used by every caller that needs hunks.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

HUNK_HEADER_PATTERN = re.compile(r"^@@\s+-(\d+)(?:,(\d*))?\s+\+(\d+)(?:,(\d*))?\s+@@")
BINARY_MARKER_PATTERN = re.compile(r"^Binary files .+ differ$", re.MULTILINE)


# ============================================================
# Domain Models
# ============================================================


class LineType(Enum):
    """Type of line in a diff hunk."""

    CONTEXT = "context"
    ADD = "add"
    DELETE = "delete"


class FileStatus(Enum):
    """VCS status of a changed file."""

    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"

    @classmethod
    def from_string(cls, value: str) -> FileStatus:
        """Parse a FileStatus from a VCS status code.

        Only the first character is significant, so git's scored codes such
        as ``R100`` or ``C075`` map to RENAMED and COPIED.

        Raises:
            ValueError: If the code is not a known status
        """
        code = value[:1].upper()
        for member in cls:
            if member.value == code:
                return member
        valid_values = [m.value for m in cls]
        raise ValueError(
            f"Invalid file status: {value}. Must be one of: {', '.join(valid_values)}"
        )

    @classmethod
    def coerce(cls, value: str) -> FileStatus:
        """Parse a status code, treating unknown codes as MODIFIED."""
        try:
            return cls.from_string(value)
        except ValueError:
            logger.debug("Unknown VCS status %r, treating as modified", value)
            return cls.MODIFIED


@dataclass(frozen=True)
class DiffLine:
    """A single line from a hunk with per-side numbering.

    Attributes:
        type: Whether this is a context, added or deleted line
        line_no_old: Line number in the old file (None for added lines)
        line_no_new: Line number in the new file (None for deleted lines)
        content_old: Text on the old side ("" when the line is absent there)
        content_new: Text on the new side ("" when the line is absent there)
    """

    type: LineType
    line_no_old: int | None = None
    line_no_new: int | None = None
    content_old: str = ""
    content_new: str = ""

    @property
    def is_changed(self) -> bool:
        """Check if this line represents a change (added or deleted)."""
        return self.type in (LineType.ADD, LineType.DELETE)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "line_no_old": self.line_no_old,
            "line_no_new": self.line_no_new,
            "content_old": self.content_old,
            "content_new": self.content_new,
        }


@dataclass
class Hunk:
    """Represents a single hunk from a unified diff.

    A hunk is a contiguous region of change, identified by its @@ header
    containing line number information.
    """

    header: str
    old_start: int = 1
    old_count: int = 1
    new_start: int = 1
    new_count: int = 1
    lines: list[DiffLine] = field(default_factory=list)

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_header(cls, header: str) -> Hunk:
        """Create an empty hunk from its @@ header line.

        An omitted count means a count of 1. A header whose numbers cannot
        be parsed falls back to 1 for all four fields so one bad hunk does
        not abort the rest of the diff.

        Args:
            header: The raw header line, e.g. "@@ -10,2 +10,3 @@ def foo():"

        Returns:
            Hunk with numbering populated and no lines
        """
        old_start = old_count = new_start = new_count = 1

        match = HUNK_HEADER_PATTERN.match(header)
        if match:
            old_start = int(match.group(1))
            old_count = int(match.group(2)) if match.group(2) else 1
            new_start = int(match.group(3))
            new_count = int(match.group(4)) if match.group(4) else 1
        else:
            logger.debug("Unparsable hunk header, defaulting counts to 1: %r", header)

        return cls(
            header=header,
            old_start=old_start,
            old_count=old_count,
            new_start=new_start,
            new_count=new_count,
        )

    def to_dict(self) -> dict:
        """Convert hunk to dictionary for JSON serialization."""
        return {
            "header": self.header,
            "old_start": self.old_start,
            "old_count": self.old_count,
            "new_start": self.new_start,
            "new_count": self.new_count,
            "lines": [line.to_dict() for line in self.lines],
        }

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @property
    def old_line_total(self) -> int:
        """Number of lines that exist in the old file (context + delete)."""
        return sum(1 for line in self.lines if line.type != LineType.ADD)

    @property
    def new_line_total(self) -> int:
        """Number of lines that exist in the new file (context + add)."""
        return sum(1 for line in self.lines if line.type != LineType.DELETE)

    @property
    def is_consistent(self) -> bool:
        """Check the parsed lines agree with the counts in the header."""
        return self.old_line_total == self.old_count and self.new_line_total == self.new_count


@dataclass
class FileDiff:
    """The parse result for one file.

    Use from_raw_diff() to build one from the raw per-file diff text the VCS
    collaborator returns.
    """

    path: str
    status: FileStatus = FileStatus.MODIFIED
    old_path: str | None = None
    is_binary: bool = False
    hunks: list[Hunk] = field(default_factory=list)

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_raw_diff(
        cls,
        path: str,
        raw_diff: str,
        status: FileStatus = FileStatus.MODIFIED,
        old_path: str | None = None,
    ) -> FileDiff:
        """Parse raw per-file diff output into a FileDiff.

        Args:
            path: File path relative to the repository root
            raw_diff: Raw diff output for this one file
            status: VCS status of the file
            old_path: Rename source, if any

        Returns:
            FileDiff with hunks parsed, or flagged binary with no hunks
        """
        if not raw_diff:
            return cls(path=path, status=status, old_path=old_path)

        if is_binary_diff(raw_diff):
            return cls(path=path, status=status, old_path=old_path, is_binary=True)

        return cls(
            path=path,
            status=status,
            old_path=old_path,
            hunks=parse_unified_diff(raw_diff.split("\n")),
        )

    def to_dict(self) -> dict:
        """Convert the file diff to a dictionary for JSON serialization."""
        return {
            "path": self.path,
            "old_path": self.old_path,
            "status": self.status.value,
            "is_binary": self.is_binary,
            "hunks": [hunk.to_dict() for hunk in self.hunks],
        }

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        """Check if there is nothing to display (no hunks, not binary)."""
        return not self.hunks and not self.is_binary


# ============================================================
# Parsing
# ============================================================


def is_binary_diff(raw_diff: str) -> bool:
    """Check if diff output contains the "Binary files ... differ" marker."""
    return BINARY_MARKER_PATTERN.search(raw_diff) is not None


def parse_unified_diff(diff_lines: list[str]) -> list[Hunk]:
    """Parse the body of a unified diff into hunks.

    Lines before the first @@ header (file headers, index lines) are
    ignored. Within a hunk, "-" lines are deletions, "+" lines are
    additions and " " lines are context. The "\\ No newline at end of file"
    marker and any unrecognised line are dropped without consuming a line
    number.

    Args:
        diff_lines: Raw diff output split by physical line

    Returns:
        Hunks in source order (empty when the diff has no hunks)
    """
    hunks: list[Hunk] = []
    current_hunk: Hunk | None = None
    old_line_no = 0
    new_line_no = 0

    for line in diff_lines:
        if line.startswith("@@"):
            if current_hunk is not None:
                hunks.append(current_hunk)

            current_hunk = Hunk.from_header(line)
            old_line_no = current_hunk.old_start
            new_line_no = current_hunk.new_start
            continue

        if current_hunk is None:
            continue

        prefix = line[:1]
        content = line[1:]

        if prefix == "-":
            current_hunk.lines.append(
                DiffLine(
                    type=LineType.DELETE,
                    line_no_old=old_line_no,
                    content_old=content,
                )
            )
            old_line_no += 1
        elif prefix == "+":
            current_hunk.lines.append(
                DiffLine(
                    type=LineType.ADD,
                    line_no_new=new_line_no,
                    content_new=content,
                )
            )
            new_line_no += 1
        elif prefix == " ":
            current_hunk.lines.append(
                DiffLine(
                    type=LineType.CONTEXT,
                    line_no_old=old_line_no,
                    line_no_new=new_line_no,
                    content_old=content,
                    content_new=content,
                )
            )
            old_line_no += 1
            new_line_no += 1
        elif prefix != "\\" and line:
            logger.debug("Skipping unrecognised diff line: %r", line)

    if current_hunk is not None:
        hunks.append(current_hunk)

    return hunks
