"""Command-line interface for autoedit.

This module provides the main entry point for running the snippet writer
from the command line. It uses argparse to collect a single edit request,
hands it to SnippetWriter and maps failures to exit codes.
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import EditorConfig
from .errors import (
    EXIT_SUCCESS,
    AutoEditError,
    PreconditionError,
    UsageError,
)
from .models.edit_request import CommentStyle, EditMode, EditRequest, EditStatus
from .writer.snippet_writer import SnippetWriter


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors as UsageError (exit 1)."""

    def error(self, message):
        raise UsageError(message)


def load_snippet(args: argparse.Namespace, encoding: str) -> str:
    """Read the snippet from --snippet or --snippet-file and trim it.

    Args:
        args: Parsed command-line arguments.
        encoding: Encoding of the snippet file.

    Returns:
        The trimmed snippet.

    Raises:
        PreconditionError: If the snippet file can't be read or the snippet
            is empty after trimming.
    """
    if args.snippet is not None:
        snippet = args.snippet
    else:
        try:
            snippet = Path(args.snippet_file).read_text(
                encoding=encoding, errors="surrogateescape"
            )
        except OSError as e:
            raise PreconditionError(
                f"cannot read snippet file {args.snippet_file}: {e.strerror or e}"
            ) from e

    snippet = snippet.strip()
    if not snippet:
        raise PreconditionError("snippet is empty")
    return snippet


def build_request(args: argparse.Namespace, config: EditorConfig) -> EditRequest:
    """Turn parsed arguments into an EditRequest.

    Preconditions are checked in the order the user is most likely to fix
    them: target file, snippet, then mode.

    Raises:
        PreconditionError: If the target file is missing or the snippet empty.
        UnsupportedModeError: If --mode is not a known mode.
        UsageError: If --comment-style is unknown.
    """
    if not Path(args.file).is_file():
        raise PreconditionError(f"file not found: {args.file}")

    snippet = load_snippet(args, config.encoding)
    mode = EditMode.parse(args.mode)

    comment_style = config.comment_style
    if args.comment_style:
        try:
            comment_style = CommentStyle.parse(args.comment_style)
        except ValueError as e:
            raise UsageError(str(e)) from e

    return EditRequest(
        file_path=args.file,
        mode=mode,
        snippet=snippet,
        pattern=args.pattern or None,
        marker_id=args.marker or None,
        force=args.force,
        skip_backup=args.no_backup,
        comment_style=comment_style,
        dry_run=args.dry_run,
    )


def cmd_edit(args: argparse.Namespace, writer: SnippetWriter) -> int:
    """Apply one edit and report the outcome.

    Args:
        args: Parsed command-line arguments.
        writer: Snippet writer to apply the edit with.

    Returns:
        Exit code: 0 on success or idempotent skip, 1 for usage and
        precondition errors, 2 for engine and I/O failures.
    """
    try:
        request = build_request(args, writer.config)
        result = writer.apply(request)

        if result.status is EditStatus.SKIPPED:
            print(
                f"Skipping: marker '{request.marker_id}' already present. "
                "Use --force to insert again."
            )
        elif result.status is EditStatus.DRY_RUN:
            print(result.diff, end="")
            print(f"Dry run: no changes written to {request.file_path}")
        else:
            if result.backup_path:
                print(f"Backup created: {result.backup_path}")
            print("Edit applied successfully.")
        return EXIT_SUCCESS

    except AutoEditError as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc(file=sys.stderr)
        return e.exit_code


def create_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="autoedit",
        description=(
            "Insert a snippet into an existing file, anchored by a regular "
            "expression, without inserting it twice"
        ),
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument("--file", required=True, help="Path to the file to edit")
    parser.add_argument(
        "--mode",
        required=True,
        help="Insertion mode: append, prepend, after, before or replace",
    )

    snippet_group = parser.add_mutually_exclusive_group(required=True)
    snippet_group.add_argument("--snippet", help="Snippet text to insert")
    snippet_group.add_argument(
        "--snippet-file", help="Path to a file containing the snippet"
    )

    parser.add_argument(
        "--pattern",
        help=(
            "Regular expression anchoring after/before/replace. A pattern "
            "wrapped in matching delimiters (/ # ~ ! @ %% |) with optional "
            "imsxu flags is read preg-style: /usr/bin/ matches usr/bin; "
            "write \\/usr/bin/ to match the slashes too"
        ),
    )
    parser.add_argument(
        "--marker", help="Marker id that brackets the snippet and prevents duplicates"
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Insert even if the marker is already present",
    )
    parser.add_argument(
        "--no-backup",
        action="store_true",
        help="Do not create a timestamped .bak copy before editing",
    )
    parser.add_argument(
        "--comment-style",
        help=(
            "Comment delimiters for marker lines: "
            + ", ".join(style.value for style in CommentStyle)
            + " (default: block, or $AUTOEDIT_COMMENT_STYLE)"
        ),
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the resulting diff without creating a backup or writing",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose output"
    )
    return parser


def main(argv: list | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv).

    Returns:
        Exit code (0 success, 1 usage error, 2 edit failure).
    """
    parser = create_parser()

    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Instantiate dependencies (ONLY place with instantiation)
    try:
        config = EditorConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return UsageError.exit_code
    writer = SnippetWriter(config=config)

    return cmd_edit(args, writer)


if __name__ == "__main__":
    sys.exit(main())
