"""Tests for DiffCache."""

import unittest

from diffreview.domain.diff import FileDiff
from diffreview.services.diff_cache import DiffCache


class TestDiffCache(unittest.TestCase):
    """Tests for DiffCache."""

    def setUp(self):
        self.cache = DiffCache()
        self.diff = FileDiff(path="a.py")

    def test_put_and_get(self):
        """Test that stored diffs are returned by path."""
        self.cache.put(self.diff)

        self.assertIs(self.cache.get("a.py"), self.diff)
        self.assertEqual(len(self.cache), 1)

    def test_get_missing(self):
        """Test that unknown paths return None."""
        self.assertIsNone(self.cache.get("nope.py"))

    def test_evict(self):
        """Test that evicting reports whether the path was cached."""
        self.cache.put(self.diff)

        self.assertTrue(self.cache.evict("a.py"))
        self.assertFalse(self.cache.evict("a.py"))
        self.assertIsNone(self.cache.get("a.py"))

    def test_clear(self):
        """Test that clear empties the cache."""
        self.cache.put(self.diff)
        self.cache.put(FileDiff(path="b.py"))

        self.cache.clear()

        self.assertEqual(len(self.cache), 0)


if __name__ == "__main__":
    unittest.main()
