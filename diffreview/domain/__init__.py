"""Domain models for diffreview."""

from diffreview.domain.diff import (
    DiffLine,
    FileDiff,
    FileStatus,
    Hunk,
    LineType,
    is_binary_diff,
    parse_unified_diff,
)
from diffreview.domain.fingerprint import compute_fingerprint
from diffreview.domain.rename import expand_rename_path
from diffreview.domain.review import (
    Comment,
    CommentType,
    FileReviewState,
    ReviewSession,
    Side,
)
from diffreview.domain.side_by_side import AlignedRow, RowType, format_rows, to_side_by_side
from diffreview.domain.vcs import VcsFileChange, VcsType

__all__ = [
    "AlignedRow",
    "Comment",
    "CommentType",
    "DiffLine",
    "FileDiff",
    "FileReviewState",
    "FileStatus",
    "Hunk",
    "LineType",
    "ReviewSession",
    "RowType",
    "Side",
    "VcsFileChange",
    "VcsType",
    "compute_fingerprint",
    "expand_rename_path",
    "format_rows",
    "is_binary_diff",
    "parse_unified_diff",
    "to_side_by_side",
]
