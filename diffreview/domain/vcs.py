"""Domain types for version control backends.

This module defines the VcsType enum used to select a backend in the
backend factory, and the VcsFileChange record every backend returns when
listing changed files.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class VcsType(Enum):
    """Version control system selection.

    Attributes:
        AUTO: Detect from the directory tree (default)
        GIT: Git repository
        JJ: Jujutsu repository (jj repos are also git repos; jj wins)
    """

    AUTO = "auto"
    GIT = "git"
    JJ = "jj"

    @classmethod
    def from_string(cls, value: str) -> VcsType:
        """Parse VcsType from string value.

        Args:
            value: String value ("auto", "git" or "jj")

        Returns:
            Corresponding VcsType enum value

        Raises:
            ValueError: If value is not a valid VcsType

        Examples:
            >>> VcsType.from_string("jj")
            <VcsType.JJ: 'jj'>
            >>> VcsType.from_string("Git")
            <VcsType.GIT: 'git'>
        """
        value_lower = value.lower()
        for member in cls:
            if member.value == value_lower:
                return member
        valid_values = [m.value for m in cls]
        raise ValueError(
            f"Invalid VCS type: {value}. Must be one of: {', '.join(valid_values)}"
        )

    @property
    def display_name(self) -> str:
        return {VcsType.AUTO: "Auto", VcsType.GIT: "Git", VcsType.JJ: "Jujutsu"}[self]


@dataclass(frozen=True)
class VcsFileChange:
    """A changed file as listed by the VCS."""

    status: str
    path: str
    old_path: str | None = None
