"""Domain models for review state.

Parse-once pattern: Stored session JSON is parsed into type-safe models at
the boundary. Services use the clean, typed API - no dictionary access.

Comments are anchored to (file, line, side). They are only meaningful
relative to the exact diff they were written against, so when a file's diff
fingerprint changes the file's comments are deleted and its reviewed flag
cleared rather than left pointing at a line that may now mean something
else.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from diffreview.domain.fingerprint import compute_fingerprint

logger = logging.getLogger(__name__)

SESSION_VERSION = "1.0"


def _iso_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _new_id() -> str:
    return str(uuid.uuid4())


# ============================================================
# Domain Models
# ============================================================


class Side(Enum):
    """Which side of the diff a comment is anchored to."""

    OLD = "old"
    NEW = "new"


class CommentType(Enum):
    """Kind of review comment."""

    NOTE = "note"
    SUGGESTION = "suggestion"
    ISSUE = "issue"
    PRAISE = "praise"

    @classmethod
    def from_string(cls, value: str) -> CommentType:
        """Parse CommentType from string value.

        Raises:
            ValueError: If value is not a valid CommentType
        """
        value_lower = value.lower()
        for member in cls:
            if member.value == value_lower:
                return member
        valid_values = [m.value for m in cls]
        raise ValueError(
            f"Invalid comment type: {value}. Must be one of: {', '.join(valid_values)}"
        )


@dataclass
class Comment:
    """A review comment anchored to a file, and optionally a line and side.

    File-level comments have neither line nor side.
    """

    file: str
    type: CommentType
    text: str
    line: int | None = None
    side: Side | None = None
    id: str = field(default_factory=_new_id)
    created_at: str = field(default_factory=_iso_timestamp)

    @classmethod
    def from_dict(cls, data: dict) -> Comment:
        side = data.get("side")
        return cls(
            id=data.get("id") or _new_id(),
            file=data.get("file", ""),
            line=data.get("line"),
            side=Side(side) if side else None,
            type=CommentType.from_string(data.get("type", CommentType.NOTE.value)),
            text=data.get("text", ""),
            created_at=data.get("created_at") or _iso_timestamp(),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "file": self.file,
            "line": self.line,
            "side": self.side.value if self.side else None,
            "type": self.type.value,
            "text": self.text,
            "created_at": self.created_at,
        }

    @property
    def is_file_level(self) -> bool:
        return self.line is None


@dataclass
class FileReviewState:
    """Review state of one changed file.

    Attributes:
        path: File path relative to the repository root
        vcs_status: Status code reported by the VCS (A, M, D, R, C)
        reviewed: Whether the reviewer has marked the file as reviewed
        diff_fingerprint: Fingerprint of the diff the review state refers to
    """

    path: str
    vcs_status: str
    reviewed: bool = False
    diff_fingerprint: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> FileReviewState:
        return cls(
            path=data.get("path", ""),
            vcs_status=data.get("vcs_status", data.get("git_status", "M")),
            reviewed=bool(data.get("reviewed", False)),
            diff_fingerprint=data.get("diff_fingerprint", data.get("diff_hash")),
        )

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "vcs_status": self.vcs_status,
            "reviewed": self.reviewed,
            "diff_fingerprint": self.diff_fingerprint,
        }


@dataclass
class ReviewSession:
    """All review state for one repository at one base ref.

    This is the top-level domain model for review state.
    Use from_dict() to parse stored JSON into a type-safe model.
    """

    repo_root: str
    base_ref: str = ""
    id: str = field(default_factory=_new_id)
    version: str = SESSION_VERSION
    created_at: str = field(default_factory=_iso_timestamp)
    updated_at: str = field(default_factory=_iso_timestamp)
    files: dict[str, FileReviewState] = field(default_factory=dict)
    comments: list[Comment] = field(default_factory=list)

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> ReviewSession:
        """Parse a complete session from its stored JSON dictionary.

        Args:
            data: Dictionary previously produced by to_dict()

        Returns:
            Typed ReviewSession with all nested models parsed
        """
        files = {
            path: FileReviewState.from_dict({"path": path, **file_data})
            for path, file_data in data.get("files", {}).items()
        }
        comments = [Comment.from_dict(c) for c in data.get("comments", [])]

        return cls(
            id=data.get("id") or _new_id(),
            version=data.get("version", SESSION_VERSION),
            repo_root=data.get("repo_root", ""),
            base_ref=data.get("base_ref", ""),
            created_at=data.get("created_at") or _iso_timestamp(),
            updated_at=data.get("updated_at") or _iso_timestamp(),
            files=files,
            comments=comments,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "version": self.version,
            "repo_root": self.repo_root,
            "base_ref": self.base_ref,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "files": {path: state.to_dict() for path, state in self.files.items()},
            "comments": [comment.to_dict() for comment in self.comments],
        }

    # --------------------------------------------------------
    # File State
    # --------------------------------------------------------

    def ensure_file(self, path: str, vcs_status: str, raw_diff_text: str | None = None) -> bool:
        """Track a file, resetting its review state if its diff changed.

        Args:
            path: File path relative to the repository root
            vcs_status: Current VCS status code of the file
            raw_diff_text: Raw diff output for the file, if it could be fetched

        Returns:
            True if the file was reset because its diff changed
        """
        fingerprint = compute_fingerprint(raw_diff_text) if raw_diff_text is not None else None

        existing = self.files.get(path)
        if existing is None:
            self.files[path] = FileReviewState(
                path=path,
                vcs_status=vcs_status,
                diff_fingerprint=fingerprint,
            )
            return False

        if fingerprint is None:
            return False

        if existing.diff_fingerprint is None:
            existing.diff_fingerprint = fingerprint
            return False

        if existing.diff_fingerprint != fingerprint:
            logger.info("Diff changed for %s, resetting review state", path)
            self.reset_file(path)
            existing.diff_fingerprint = fingerprint
            existing.vcs_status = vcs_status
            return True

        return False

    def reset_file(self, path: str) -> None:
        """Clear a file's reviewed flag and delete every comment on it."""
        state = self.files.get(path)
        if state is not None:
            state.reviewed = False
        self.comments = [c for c in self.comments if c.file != path]

    def get_file_state(self, path: str) -> FileReviewState | None:
        return self.files.get(path)

    def is_file_reviewed(self, path: str) -> bool:
        state = self.files.get(path)
        return state.reviewed if state else False

    def set_file_reviewed(self, path: str, reviewed: bool) -> None:
        state = self.files.get(path)
        if state is not None:
            state.reviewed = reviewed

    # --------------------------------------------------------
    # Comments
    # --------------------------------------------------------

    def add_comment(
        self,
        file: str,
        comment_type: CommentType,
        text: str,
        line: int | None = None,
        side: Side | None = None,
    ) -> Comment:
        comment = Comment(file=file, type=comment_type, text=text, line=line, side=side)
        self.comments.append(comment)
        return comment

    def get_comment(self, comment_id: str) -> Comment | None:
        for comment in self.comments:
            if comment.id == comment_id:
                return comment
        return None

    def update_comment(self, comment_id: str, comment_type: CommentType, text: str) -> bool:
        comment = self.get_comment(comment_id)
        if comment is None:
            return False
        comment.type = comment_type
        comment.text = text
        return True

    def delete_comment(self, comment_id: str) -> bool:
        for index, comment in enumerate(self.comments):
            if comment.id == comment_id:
                del self.comments[index]
                return True
        return False

    def get_file_comments(self, path: str) -> list[Comment]:
        return [c for c in self.comments if c.file == path]

    def get_line_comments(self, path: str, line: int, side: Side) -> list[Comment]:
        return [
            c
            for c in self.comments
            if c.file == path and c.line == line and c.side == side
        ]

    @property
    def has_comments(self) -> bool:
        return bool(self.comments)

    # --------------------------------------------------------
    # Summary
    # --------------------------------------------------------

    def get_progress(self) -> tuple[int, int]:
        """Get review progress.

        Returns:
            (reviewed, total) file counts
        """
        reviewed = sum(1 for state in self.files.values() if state.reviewed)
        return reviewed, len(self.files)

    def get_comment_counts(self) -> dict[CommentType, int]:
        counts = {comment_type: 0 for comment_type in CommentType}
        for comment in self.comments:
            counts[comment.type] += 1
        return counts

    def touch(self) -> None:
        self.updated_at = _iso_timestamp()

    def clear(self) -> None:
        """Drop all file state and comments."""
        self.files = {}
        self.comments = []
        self.touch()
