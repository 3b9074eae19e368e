"""Side-by-side alignment of parsed hunks.

Converts each hunk's linear stream of context/delete/add lines into rows for
a two-column before/after display. A run of deletions immediately followed
by a run of additions is treated as a modified block and paired
index-by-index into "change" rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from diffreview.domain.diff import DiffLine, Hunk, LineType


class RowType(Enum):
    """Type of a side-by-side row."""

    HUNK_HEADER = "hunk_header"
    CONTEXT = "context"
    ADD = "add"
    DELETE = "delete"
    CHANGE = "change"


@dataclass(frozen=True)
class AlignedRow:
    """One row of the side-by-side view.

    Change rows carry the old number of a deletion and the new number of
    the addition paired with it; the two are not the same logical line.
    """

    type: RowType
    line_no_old: int | None = None
    line_no_new: int | None = None
    content_old: str = ""
    content_new: str = ""

    @classmethod
    def header(cls, hunk: Hunk) -> AlignedRow:
        return cls(type=RowType.HUNK_HEADER, content_old=hunk.header)

    @classmethod
    def from_line(cls, line: DiffLine) -> AlignedRow:
        """Build a standalone row carrying one parsed line unchanged."""
        return cls(
            type=RowType(line.type.value),
            line_no_old=line.line_no_old,
            line_no_new=line.line_no_new,
            content_old=line.content_old,
            content_new=line.content_new,
        )

    @classmethod
    def paired(cls, deleted: DiffLine, added: DiffLine) -> AlignedRow:
        return cls(
            type=RowType.CHANGE,
            line_no_old=deleted.line_no_old,
            line_no_new=added.line_no_new,
            content_old=deleted.content_old,
            content_new=added.content_new,
        )

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "line_no_old": self.line_no_old,
            "line_no_new": self.line_no_new,
            "content_old": self.content_old,
            "content_new": self.content_new,
        }


def to_side_by_side(hunks: list[Hunk]) -> list[AlignedRow]:
    """Align hunks into side-by-side rows.

    Pairing is positional, not by content similarity: with 3 deletions
    followed by 1 addition, index 0 becomes a change row and indices 1-2
    stay standalone deletions.

    Args:
        hunks: Parsed hunks, e.g. from parse_unified_diff()

    Returns:
        Rows in display order, one hunk_header row leading each hunk
    """
    rows: list[AlignedRow] = []

    for hunk in hunks:
        rows.append(AlignedRow.header(hunk))
        rows.extend(_align_hunk_lines(hunk.lines))

    return rows


def _align_hunk_lines(lines: list[DiffLine]) -> list[AlignedRow]:
    rows: list[AlignedRow] = []
    i = 0

    while i < len(lines):
        line = lines[i]

        if line.type != LineType.DELETE:
            # Context, or an addition with no deletion run before it
            rows.append(AlignedRow.from_line(line))
            i += 1
            continue

        j = i
        while j < len(lines) and lines[j].type == LineType.DELETE:
            j += 1
        deletions = lines[i:j]

        k = j
        while k < len(lines) and lines[k].type == LineType.ADD:
            k += 1
        additions = lines[j:k]

        for index in range(max(len(deletions), len(additions))):
            if index < len(deletions) and index < len(additions):
                rows.append(AlignedRow.paired(deletions[index], additions[index]))
            elif index < len(deletions):
                rows.append(AlignedRow.from_line(deletions[index]))
            else:
                rows.append(AlignedRow.from_line(additions[index]))

        i = k

    return rows


def format_rows(rows: list[AlignedRow], width: int = 40) -> str:
    """Render rows as plain two-column text.

    Each column shows a right-aligned line number, a one-character marker
    and the content truncated or padded to ``width``.
    """
    rendered: list[str] = []

    for row in rows:
        if row.type == RowType.HUNK_HEADER:
            rendered.append(row.content_old)
            continue

        old_marker, new_marker = _ROW_MARKERS[row.type]
        left = _format_cell(row.line_no_old, old_marker, row.content_old, width)
        right = _format_cell(row.line_no_new, new_marker, row.content_new, width)
        rendered.append(f"{left} | {right}".rstrip())

    return "\n".join(rendered)


_ROW_MARKERS = {
    RowType.CONTEXT: (" ", " "),
    RowType.ADD: (" ", "+"),
    RowType.DELETE: ("-", " "),
    RowType.CHANGE: ("-", "+"),
}


def _format_cell(line_no: int | None, marker: str, content: str, width: int) -> str:
    number = f"{line_no:4d}" if line_no is not None else "    "
    if line_no is None:
        marker = " "
    text = content[:width].ljust(width)
    return f"{number} {marker}{text}"
