"""CLI command implementations."""

from diffreview.commands.comment import cmd_comment
from diffreview.commands.expand_rename import cmd_expand_rename
from diffreview.commands.export import cmd_export
from diffreview.commands.mark_reviewed import cmd_mark_reviewed
from diffreview.commands.parse_diff import cmd_parse_diff
from diffreview.commands.side_by_side import cmd_side_by_side
from diffreview.commands.status import cmd_status

__all__ = [
    "cmd_comment",
    "cmd_expand_rename",
    "cmd_export",
    "cmd_mark_reviewed",
    "cmd_parse_diff",
    "cmd_side_by_side",
    "cmd_status",
]
