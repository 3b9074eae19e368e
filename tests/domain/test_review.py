"""Tests for review session domain models.

Tests cover:
- Fingerprint-based invalidation in ReviewSession.ensure_file
- Reviewed flags and comment management
- Progress and comment counts
- Round-tripping sessions through dictionaries
"""

import unittest

from diffreview.domain.fingerprint import compute_fingerprint
from diffreview.domain.review import (
    Comment,
    CommentType,
    FileReviewState,
    ReviewSession,
    Side,
)


DIFF_V1 = "@@ -1 +1 @@\n-a\n+b\n"
DIFF_V2 = "@@ -1 +1 @@\n-a\n+c\n"


def make_session() -> ReviewSession:
    """Create an empty session for testing."""
    return ReviewSession(repo_root="/repo", base_ref="abc123")


class TestEnsureFile(unittest.TestCase):
    """Tests for ReviewSession.ensure_file."""

    def setUp(self):
        """Set up a session tracking app.py as reviewed with two comments."""
        self.session = make_session()
        self.session.ensure_file("app.py", "M", DIFF_V1)
        self.session.set_file_reviewed("app.py", True)
        self.session.add_comment("app.py", CommentType.ISSUE, "bug", line=1, side=Side.NEW)
        self.session.add_comment("app.py", CommentType.NOTE, "general")
        self.session.ensure_file("other.py", "A", DIFF_V1)
        self.session.add_comment("other.py", CommentType.PRAISE, "nice")

    def test_new_file_is_tracked_with_fingerprint(self):
        """Test that a first sighting records the fingerprint and is not a reset."""
        session = make_session()

        changed = session.ensure_file("new.py", "A", DIFF_V1)

        self.assertFalse(changed)
        state = session.get_file_state("new.py")
        self.assertEqual(state.vcs_status, "A")
        self.assertFalse(state.reviewed)
        self.assertEqual(state.diff_fingerprint, compute_fingerprint(DIFF_V1))

    def test_unchanged_diff_keeps_state(self):
        """Test that the same diff text leaves review state alone."""
        changed = self.session.ensure_file("app.py", "M", DIFF_V1)

        self.assertFalse(changed)
        self.assertTrue(self.session.is_file_reviewed("app.py"))
        self.assertEqual(len(self.session.get_file_comments("app.py")), 2)

    def test_changed_diff_resets_file(self):
        """Test that a new fingerprint clears the flag and the file's comments."""
        changed = self.session.ensure_file("app.py", "M", DIFF_V2)

        self.assertTrue(changed)
        self.assertFalse(self.session.is_file_reviewed("app.py"))
        self.assertEqual(self.session.get_file_comments("app.py"), [])
        self.assertEqual(
            self.session.get_file_state("app.py").diff_fingerprint,
            compute_fingerprint(DIFF_V2),
        )

    def test_reset_keeps_other_files_comments(self):
        """Test that invalidating one file leaves other files untouched."""
        self.session.ensure_file("app.py", "M", DIFF_V2)

        self.assertEqual(len(self.session.get_file_comments("other.py")), 1)

    def test_changed_diff_updates_status(self):
        """Test that a reset records the current VCS status."""
        self.session.ensure_file("app.py", "R", DIFF_V2)

        self.assertEqual(self.session.get_file_state("app.py").vcs_status, "R")

    def test_missing_diff_text_changes_nothing(self):
        """Test that a failed diff fetch never resets state."""
        changed = self.session.ensure_file("app.py", "M", None)

        self.assertFalse(changed)
        self.assertTrue(self.session.is_file_reviewed("app.py"))
        self.assertEqual(
            self.session.get_file_state("app.py").diff_fingerprint,
            compute_fingerprint(DIFF_V1),
        )

    def test_missing_stored_fingerprint_is_backfilled(self):
        """Test that a state without a fingerprint adopts the current one silently."""
        session = make_session()
        session.ensure_file("app.py", "M", None)
        session.set_file_reviewed("app.py", True)

        changed = session.ensure_file("app.py", "M", DIFF_V1)

        self.assertFalse(changed)
        self.assertTrue(session.is_file_reviewed("app.py"))
        self.assertEqual(session.get_file_state("app.py").diff_fingerprint, compute_fingerprint(DIFF_V1))

    def test_changing_back_resets_again(self):
        """Test that any fingerprint difference counts, not only novel text."""
        self.session.ensure_file("app.py", "M", DIFF_V2)
        self.session.set_file_reviewed("app.py", True)

        self.assertTrue(self.session.ensure_file("app.py", "M", DIFF_V1))
        self.assertFalse(self.session.is_file_reviewed("app.py"))


class TestReviewFlags(unittest.TestCase):
    """Tests for reviewed flag handling."""

    def test_untracked_file_is_never_reviewed(self):
        """Test that flag operations on untracked paths are no-ops."""
        session = make_session()

        session.set_file_reviewed("ghost.py", True)

        self.assertFalse(session.is_file_reviewed("ghost.py"))
        self.assertIsNone(session.get_file_state("ghost.py"))


class TestComments(unittest.TestCase):
    """Tests for comment management."""

    def setUp(self):
        """Set up a session with one line comment and one file comment."""
        self.session = make_session()
        self.line_comment = self.session.add_comment(
            "a.py", CommentType.ISSUE, "off by one", line=4, side=Side.OLD
        )
        self.file_comment = self.session.add_comment("a.py", CommentType.NOTE, "overall fine")

    def test_file_level_comment(self):
        """Test that comments without a line are file-level."""
        self.assertTrue(self.file_comment.is_file_level)
        self.assertFalse(self.line_comment.is_file_level)

    def test_get_line_comments_matches_side(self):
        """Test that line lookups distinguish old and new sides."""
        self.assertEqual(self.session.get_line_comments("a.py", 4, Side.OLD), [self.line_comment])
        self.assertEqual(self.session.get_line_comments("a.py", 4, Side.NEW), [])

    def test_update_comment(self):
        """Test updating type and text of an existing comment."""
        updated = self.session.update_comment(self.line_comment.id, CommentType.SUGGESTION, "use <=")

        self.assertTrue(updated)
        comment = self.session.get_comment(self.line_comment.id)
        self.assertEqual(comment.type, CommentType.SUGGESTION)
        self.assertEqual(comment.text, "use <=")

    def test_update_unknown_comment(self):
        """Test that updating a missing id reports failure."""
        self.assertFalse(self.session.update_comment("missing", CommentType.NOTE, "x"))

    def test_delete_comment(self):
        """Test deleting a comment by id."""
        self.assertTrue(self.session.delete_comment(self.file_comment.id))
        self.assertFalse(self.session.delete_comment(self.file_comment.id))
        self.assertEqual(self.session.comments, [self.line_comment])

    def test_comment_ids_are_unique(self):
        """Test that each comment gets its own id."""
        self.assertNotEqual(self.line_comment.id, self.file_comment.id)

    def test_has_comments(self):
        """Test the has_comments property."""
        self.assertTrue(self.session.has_comments)
        self.assertFalse(make_session().has_comments)


class TestSummary(unittest.TestCase):
    """Tests for progress and counts."""

    def test_get_progress(self):
        """Test reviewed/total file counts."""
        session = make_session()
        session.ensure_file("a.py", "M", DIFF_V1)
        session.ensure_file("b.py", "A", DIFF_V1)
        session.set_file_reviewed("a.py", True)

        self.assertEqual(session.get_progress(), (1, 2))

    def test_get_comment_counts_includes_every_type(self):
        """Test that counts list all comment types, including zero counts."""
        session = make_session()
        session.add_comment("a.py", CommentType.ISSUE, "x")
        session.add_comment("a.py", CommentType.ISSUE, "y")

        counts = session.get_comment_counts()

        self.assertEqual(counts[CommentType.ISSUE], 2)
        self.assertEqual(counts[CommentType.PRAISE], 0)
        self.assertEqual(set(counts), set(CommentType))

    def test_clear(self):
        """Test that clear drops files and comments."""
        session = make_session()
        session.ensure_file("a.py", "M", DIFF_V1)
        session.add_comment("a.py", CommentType.NOTE, "x")

        session.clear()

        self.assertEqual(session.files, {})
        self.assertEqual(session.comments, [])


class TestSerialization(unittest.TestCase):
    """Tests for dictionary conversion."""

    def test_session_round_trip(self):
        """Test that to_dict output parses back into an equal session."""
        session = make_session()
        session.ensure_file("a.py", "M", DIFF_V1)
        session.set_file_reviewed("a.py", True)
        session.add_comment("a.py", CommentType.ISSUE, "bug", line=3, side=Side.NEW)

        restored = ReviewSession.from_dict(session.to_dict())

        self.assertEqual(restored, session)

    def test_file_state_accepts_legacy_keys(self):
        """Test that git_status and diff_hash are read when present."""
        state = FileReviewState.from_dict(
            {"path": "a.py", "git_status": "A", "reviewed": True, "diff_hash": "deadbeef"}
        )

        self.assertEqual(state.vcs_status, "A")
        self.assertEqual(state.diff_fingerprint, "deadbeef")
        self.assertTrue(state.reviewed)

    def test_comment_from_dict_without_side(self):
        """Test parsing a stored file-level comment."""
        comment = Comment.from_dict({"id": "c1", "file": "a.py", "type": "praise", "text": "nice"})

        self.assertEqual(comment.id, "c1")
        self.assertIsNone(comment.side)
        self.assertIsNone(comment.line)
        self.assertEqual(comment.type, CommentType.PRAISE)

    def test_comment_type_from_string_is_case_insensitive(self):
        """Test parsing comment types from user input."""
        self.assertEqual(CommentType.from_string("Issue"), CommentType.ISSUE)

    def test_comment_type_from_string_rejects_unknown(self):
        """Test that unknown comment types raise ValueError."""
        with self.assertRaises(ValueError) as ctx:
            CommentType.from_string("rant")

        self.assertIn("Invalid comment type", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
