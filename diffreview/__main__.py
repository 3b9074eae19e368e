#!/usr/bin/env python3
"""CLI entry point for diffreview.

Usage:
    python -m diffreview <command> [options]
    diffreview <command> [options]

Commands:
    parse-diff      Parse a unified diff body into numbered hunks
    side-by-side    Show a unified diff as aligned old/new columns
    expand-rename   Expand a compact {old => new} rename path
    status          Refresh and show review status for a repository
    mark-reviewed   Set or clear a file's reviewed flag
    comment         Add a review comment to a file or line
    export          Export review comments as markdown
"""

from __future__ import annotations

import argparse
import logging
import sys

from diffreview.commands import (
    cmd_comment,
    cmd_expand_rename,
    cmd_export,
    cmd_mark_reviewed,
    cmd_parse_diff,
    cmd_side_by_side,
    cmd_status,
)
from diffreview.infrastructure.config import DEFAULT_LOG_LEVEL, ConfigError, load_config


def configure_logging(level_name: str | None, config_path: str | None, repo_dir: str | None) -> None:
    """Configure root logging from --log-level, else the config file."""
    if level_name is None:
        try:
            level_name = load_config(config_path, repo_dir=repo_dir).log_level
        except ConfigError:
            # Reported by the command itself
            level_name = DEFAULT_LOG_LEVEL

    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diffreview",
        description="Review working-copy changes with side-by-side diffs and anchored comments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse-diff      Parse a unified diff body into numbered hunks
  side-by-side    Show a unified diff as aligned old/new columns
  expand-rename   Expand a compact {old => new} rename path
  status          Refresh and show review status for a repository
  mark-reviewed   Set or clear a file's reviewed flag
  comment         Add a review comment to a file or line
  export          Export review comments as markdown

Examples:
  git diff HEAD -- app.py | diffreview parse-diff --format text
  diffreview side-by-side --input-file change.diff --width 60
  diffreview expand-rename "src/{old => new}/main.py"
  diffreview status --repo ~/src/project
  diffreview comment app.py --line 12 --side new --type issue --text "Off by one"
  diffreview export --output review.md
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from config, else WARNING)",
    )
    parser.add_argument(
        "--config",
        help="Path to a YAML config file (default: $DIFFREVIEW_CONFIG or <repo>/.diffreview.yml)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # parse-diff command
    parser_parse_diff = subparsers.add_parser(
        "parse-diff",
        help="Parse a unified diff body into numbered hunks",
    )
    parser_parse_diff.add_argument(
        "--input-file",
        help="Path to diff file. If not provided, reads from stdin",
    )
    parser_parse_diff.add_argument(
        "--format",
        choices=["json", "text"],
        default="json",
        help="Output format (default: json)",
    )

    # side-by-side command
    parser_side_by_side = subparsers.add_parser(
        "side-by-side",
        help="Show a unified diff as aligned old/new columns",
    )
    parser_side_by_side.add_argument(
        "--input-file",
        help="Path to diff file. If not provided, reads from stdin",
    )
    parser_side_by_side.add_argument(
        "--width",
        type=int,
        default=40,
        help="Width of each content column (default: 40)",
    )

    # expand-rename command
    parser_expand_rename = subparsers.add_parser(
        "expand-rename",
        help="Expand a compact {old => new} rename path",
    )
    parser_expand_rename.add_argument("path", help="Path possibly containing {old => new}")

    # status command
    parser_status = subparsers.add_parser(
        "status",
        help="Refresh and show review status for a repository",
    )
    parser_status.add_argument(
        "--repo",
        default=".",
        help="Directory inside the repository (default: current directory)",
    )

    # mark-reviewed command
    parser_mark = subparsers.add_parser(
        "mark-reviewed",
        help="Set or clear a file's reviewed flag",
    )
    parser_mark.add_argument("path", help="File path relative to the repository root")
    parser_mark.add_argument("--repo", default=".", help="Directory inside the repository")
    parser_mark.add_argument(
        "--unset",
        action="store_true",
        help="Clear the reviewed flag instead of setting it",
    )

    # comment command
    parser_comment = subparsers.add_parser(
        "comment",
        help="Add a review comment to a file or line",
    )
    parser_comment.add_argument("path", help="File path relative to the repository root")
    parser_comment.add_argument("--text", required=True, help="Comment text")
    parser_comment.add_argument("--repo", default=".", help="Directory inside the repository")
    parser_comment.add_argument("--line", type=int, help="Line number (omit for a file-level comment)")
    parser_comment.add_argument(
        "--side",
        choices=["old", "new"],
        help="Diff side the line number refers to (required with --line)",
    )
    parser_comment.add_argument(
        "--type",
        dest="comment_type",
        choices=["note", "suggestion", "issue", "praise"],
        default="note",
        help="Comment type (default: note)",
    )

    # export command
    parser_export = subparsers.add_parser(
        "export",
        help="Export review comments as markdown",
    )
    parser_export.add_argument("--repo", default=".", help="Directory inside the repository")
    parser_export.add_argument(
        "--output",
        help="Path to write markdown to. If not provided, prints to stdout",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.log_level, args.config, getattr(args, "repo", None))

    # Route to command implementations with explicit parameters
    if args.command == "parse-diff":
        return cmd_parse_diff(
            input_file=args.input_file,
            output_format=args.format,
        )

    elif args.command == "side-by-side":
        return cmd_side_by_side(
            input_file=args.input_file,
            width=args.width,
        )

    elif args.command == "expand-rename":
        return cmd_expand_rename(args.path)

    elif args.command == "status":
        return cmd_status(repo_dir=args.repo, config_path=args.config)

    elif args.command == "mark-reviewed":
        return cmd_mark_reviewed(
            path=args.path,
            repo_dir=args.repo,
            unset=args.unset,
            config_path=args.config,
        )

    elif args.command == "comment":
        return cmd_comment(
            path=args.path,
            text=args.text,
            repo_dir=args.repo,
            line=args.line,
            side=args.side,
            comment_type=args.comment_type,
            config_path=args.config,
        )

    elif args.command == "export":
        return cmd_export(
            repo_dir=args.repo,
            output_file=args.output,
            config_path=args.config,
        )

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
