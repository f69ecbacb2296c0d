"""Main CLI entry point for the html-dom-tree command-line tool.

Reads a line-format document, applies one editing operation and writes the
result to stdout or to a file.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from html_dom_tree import __version__
from html_dom_tree.api import parse_file, write_file
from html_dom_tree.shared import (
    ConfigError,
    EditorConfig,
    EditResult,
    configure_logging,
    get_logger,
)
from html_dom_tree.tree import DOMTree

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130  # Standard exit code for SIGINT

logger = get_logger(__name__, None, "cli")


def _add_common_options(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "path",
        type=Path,
        help="Document to read (one token per line)"
    )
    subparser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    subparser.add_argument(
        "--encoding",
        help="Text encoding of the input and output files (default: utf-8)"
    )


def _add_edit_options(subparser: argparse.ArgumentParser) -> None:
    _add_common_options(subparser)
    subparser.add_argument(
        "--report",
        action="store_true",
        help="Print the edit report as JSON on stderr"
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="html-dom-tree",
        description="Edit line-tokenized HTML documents as a tree"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    show_parser = subparsers.add_parser("show", help="Print a document")
    _add_common_options(show_parser)
    show_parser.add_argument(
        "--tree", "-t",
        action="store_true",
        help="Print an indented outline instead of the document"
    )

    replace_parser = subparsers.add_parser("replace", help="Rename a tag everywhere")
    _add_edit_options(replace_parser)
    replace_parser.add_argument("old_tag", help="Tag to rename")
    replace_parser.add_argument("new_tag", help="Replacement tag")

    bold_parser = subparsers.add_parser(
        "bold-row", help="Boldface every column of a table row"
    )
    _add_edit_options(bold_parser)
    bold_parser.add_argument("row", type=int, help="Row number, starting at 1")

    remove_parser = subparsers.add_parser(
        "remove", help="Remove a tag, keeping its content"
    )
    _add_edit_options(remove_parser)
    remove_parser.add_argument("tag", help="Tag to remove")

    add_parser = subparsers.add_parser("add", help="Wrap every occurrence of a word")
    _add_edit_options(add_parser)
    add_parser.add_argument("word", help="Word to tag")
    add_parser.add_argument("tag", help="Tag to wrap the word with")

    return parser


def load_config(config_path: Optional[Path]) -> EditorConfig:
    """Load configuration from file, or use the defaults."""
    if config_path is None:
        return EditorConfig()
    return EditorConfig.load(config_path)


def apply_operation(tree: DOMTree, args: argparse.Namespace) -> Optional[EditResult]:
    """Apply the editing operation named by the parsed arguments."""
    if args.command == "replace":
        return tree.replace_tag(args.old_tag, args.new_tag)
    if args.command == "bold-row":
        return tree.bold_row(args.row)
    if args.command == "remove":
        return tree.remove_tag(args.tag)
    if args.command == "add":
        return tree.add_tag(args.word, args.tag)
    return None


def emit_output(text: str, args: argparse.Namespace, tree: DOMTree) -> None:
    """Write output to the requested file, or to stdout."""
    if args.output:
        write_file(tree, args.output, encoding=args.encoding)
        print(f"Output written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(text)


def run_command(args: argparse.Namespace, config: EditorConfig) -> int:
    """Load the document, apply the command and write the result."""
    tree = parse_file(args.path, encoding=args.encoding, config=config)

    if args.command == "show" and args.tree:
        outline = tree.render()
        sys.stdout.write(outline + "\n" if outline else "")
        return EXIT_OK

    result = apply_operation(tree, args)
    emit_output(tree.get_html(), args, tree)

    if result is not None and args.report:
        print(json.dumps(result.to_dict(), indent=2), file=sys.stderr)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILURE

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(config.global_.logging_level)

    try:
        return run_command(args, config)
    except OSError as e:
        logger.error("Command failed", extra={"command": args.command})
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
