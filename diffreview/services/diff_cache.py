"""Per-path cache of parsed file diffs.

The cache is owned by whoever orchestrates a review session and is cleared
or evicted explicitly on refresh. It does no locking: callers must not
refresh a path while another caller reads the same entry.
"""

from __future__ import annotations

from diffreview.domain.diff import FileDiff


class DiffCache:
    """Explicit FileDiff cache keyed by file path."""

    def __init__(self) -> None:
        self._entries: dict[str, FileDiff] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, path: str) -> FileDiff | None:
        return self._entries.get(path)

    def put(self, diff: FileDiff) -> None:
        self._entries[diff.path] = diff

    def evict(self, path: str) -> bool:
        """Drop one entry.

        Returns:
            True if the path was cached
        """
        return self._entries.pop(path, None) is not None

    def clear(self) -> None:
        self._entries.clear()
