"""Tests for the git VCS backend.

Tests cover:
- Opening a repository via rev-parse
- Reading HEAD and the current branch
- Parsing --name-status output, including renames
- Raw per-file diffs and failure handling
All commands go through a mocked CommandRunner.
"""

import unittest
from unittest.mock import MagicMock

from diffreview.domain.diff import FileStatus
from diffreview.domain.vcs import VcsFileChange, VcsType
from diffreview.infrastructure.vcs.base import VcsNotFoundError
from diffreview.infrastructure.vcs.git_backend import GitBackend, parse_name_status
from diffreview.infrastructure.vcs.runner import CommandResult


RAW_DIFF = """diff --git a/app.py b/app.py
--- a/app.py
+++ b/app.py
@@ -1 +1 @@
-old
+new
"""


def make_runner(responses: dict) -> MagicMock:
    """Create a runner answering commands from a {tuple(cmd): CommandResult} map."""
    runner = MagicMock()
    runner.run.side_effect = lambda cmd, cwd: responses.get(tuple(cmd), CommandResult(success=False))
    return runner


class TestGitBackendOpen(unittest.TestCase):
    """Tests for GitBackend.open."""

    def test_open_reads_root_ref_and_branch(self):
        """Test that open resolves the top level and refreshes state."""
        runner = make_runner(
            {
                ("git", "rev-parse", "--git-dir"): CommandResult(True, ".git\n"),
                ("git", "rev-parse", "--show-toplevel"): CommandResult(True, "/work/repo\n"),
                ("git", "rev-parse", "HEAD"): CommandResult(True, "abc123\n"),
                ("git", "branch", "--show-current"): CommandResult(True, "main\n"),
            }
        )

        backend = GitBackend.open("/work/repo/src", runner)

        self.assertEqual(backend.root, "/work/repo")
        self.assertEqual(backend.ref, "abc123")
        self.assertEqual(backend.branch, "main")
        self.assertEqual(backend.repo_name, "repo")
        self.assertEqual(backend.vcs_type, VcsType.GIT)
        runner.run.assert_any_call(["git", "rev-parse", "--git-dir"], "/work/repo/src")

    def test_detached_head_has_no_branch(self):
        """Test that an empty branch name is stored as None."""
        runner = make_runner(
            {
                ("git", "rev-parse", "--git-dir"): CommandResult(True, ".git"),
                ("git", "rev-parse", "--show-toplevel"): CommandResult(True, "/r"),
                ("git", "rev-parse", "HEAD"): CommandResult(True, "abc"),
                ("git", "branch", "--show-current"): CommandResult(True, "\n"),
            }
        )

        backend = GitBackend.open("/r", runner)

        self.assertIsNone(backend.branch)

    def test_open_outside_repository_raises(self):
        """Test that a failing rev-parse raises VcsNotFoundError."""
        runner = make_runner({})

        with self.assertRaises(VcsNotFoundError):
            GitBackend.open("/tmp", runner)


class TestGitBackendChanges(unittest.TestCase):
    """Tests for changed files and diffs."""

    def setUp(self):
        """Set up a backend with a mocked runner."""
        self.runner = MagicMock()
        self.backend = GitBackend(root="/repo", ref="abc", runner=self.runner)

    def test_get_changed_files(self):
        """Test that name-status output is parsed into changes."""
        self.runner.run.return_value = CommandResult(True, "M\tapp.py\nA\tnew.py\n")

        changes = self.backend.get_changed_files()

        self.assertEqual(
            changes,
            [VcsFileChange("M", "app.py"), VcsFileChange("A", "new.py")],
        )
        self.runner.run.assert_called_once_with(["git", "diff", "--no-color", "--name-status", "HEAD"], "/repo")

    def test_get_changed_files_failure_returns_empty(self):
        """Test that a failed command degrades to no changes."""
        self.runner.run.return_value = CommandResult(False, stderr="fatal: bad revision")

        self.assertEqual(self.backend.get_changed_files(), [])
        self.assertFalse(self.backend.has_changes())

    def test_get_file_diff_raw(self):
        """Test that the raw diff is returned untrimmed."""
        self.runner.run.return_value = CommandResult(True, RAW_DIFF)

        raw = self.backend.get_file_diff_raw("app.py")

        self.assertEqual(raw, RAW_DIFF)
        self.runner.run.assert_called_once_with(["git", "diff", "--no-color", "HEAD", "--", "app.py"], "/repo")

    def test_get_file_diff_raw_failure(self):
        """Test that a failed diff returns None."""
        self.runner.run.return_value = CommandResult(False)

        self.assertIsNone(self.backend.get_file_diff_raw("app.py"))
        self.assertIsNone(self.backend.get_file_diff("app.py"))

    def test_diff_commands_disable_color(self):
        """Test that diff listing and per-file diffs request uncolored output."""
        self.runner.run.return_value = CommandResult(True, "M\tapp.py\n")

        self.backend.get_changed_files()
        self.backend.get_file_diff_raw("app.py")

        for call in self.runner.run.call_args_list:
            cmd = call.args[0]
            self.assertEqual(cmd[:3], ["git", "diff", "--no-color"])

    def test_get_file_diff_parses_hunks(self):
        """Test that get_file_diff returns a parsed FileDiff."""
        self.runner.run.return_value = CommandResult(True, RAW_DIFF)

        diff = self.backend.get_file_diff("app.py")

        self.assertEqual(diff.path, "app.py")
        self.assertEqual(len(diff.hunks), 1)
        self.assertEqual(len(diff.hunks[0].lines), 2)

    def test_get_all_diffs_sets_status_and_old_path(self):
        """Test that get_all_diffs carries listing metadata onto each diff."""

        def run(cmd, cwd):
            if "--name-status" in cmd:
                return CommandResult(True, "R100\told.py\tnew.py\nD\tgone.py\n")
            return CommandResult(True, "")

        self.runner.run.side_effect = run

        diffs = self.backend.get_all_diffs()

        self.assertEqual([d.path for d in diffs], ["new.py", "gone.py"])
        self.assertEqual(diffs[0].status, FileStatus.RENAMED)
        self.assertEqual(diffs[0].old_path, "old.py")
        self.assertEqual(diffs[1].status, FileStatus.DELETED)


class TestParseNameStatus(unittest.TestCase):
    """Tests for parse_name_status."""

    def test_scored_rename_with_tabs(self):
        """Test that R100 lines yield old and new paths."""
        self.assertEqual(
            parse_name_status("R100\tsrc/old.py\tsrc/new.py"),
            [VcsFileChange("R", "src/new.py", old_path="src/old.py")],
        )

    def test_rename_with_spaces(self):
        """Test the whitespace-separated fallback for renames."""
        self.assertEqual(
            parse_name_status("R  old.py new.py"),
            [VcsFileChange("R", "new.py", old_path="old.py")],
        )

    def test_copy_status_is_one_character(self):
        """Test that scored copy codes are normalised."""
        self.assertEqual(parse_name_status("C075\ta.py"), [VcsFileChange("C", "a.py")])

    def test_blank_lines_are_skipped(self):
        """Test that empty output yields no changes."""
        self.assertEqual(parse_name_status("\n\n"), [])


if __name__ == "__main__":
    unittest.main()
