"""Command-line entry point for managing directories and inspecting the system."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence

from maclnr.files import WalkError, clean_dir, list_files
from maclnr.output import watch
from maclnr.system import display_memory_usage, list_processes, list_storage_devices

VERSION = "v0.1.0"
SCAN_TARGETS = ("memory", "storage", "process")

_GREEN = "\033[32m"
_RESET = "\033[0m"
_MISSING_DIR = "Please specify a directory with --dir"
_FAILURES = (OSError, RuntimeError, WalkError)


def _fail(message: str, exc: BaseException) -> int:
    print(f"{message}: {exc}", file=sys.stderr)
    return 1


def _run_or_watch(
    refresh: Callable[[], None], watching: bool, failure: str
) -> int:
    """Run refresh once, or repeatedly in watch mode until interrupted."""
    if watching:
        try:
            watch(refresh)
        except KeyboardInterrupt:
            return 130
        return 0
    try:
        refresh()
    except _FAILURES as exc:
        return _fail(failure, exc)
    return 0


def _confirm(directory: str) -> bool:
    try:
        response = input(
            f"Are you sure you want to clean the directory {directory}? (y/N): "
        )
    except EOFError:
        response = ""
    return response.strip().lower() in ("y", "yes")


def _cmd_list(args: argparse.Namespace) -> int:
    if not args.dir:
        print(_MISSING_DIR)
        return 1
    return _run_or_watch(
        lambda: list_files(args.dir, args.min_size, args.output),
        args.watch,
        "Failed to list files in directory",
    )


def _cmd_clean(args: argparse.Namespace) -> int:
    if not args.dir:
        print(_MISSING_DIR)
        return 1
    if not args.confirm and not _confirm(args.dir):
        print("Clean operation canceled.")
        return 0
    try:
        clean_dir(args.dir, args.dry_run, args.verbose, args.ds_store, args.min_size)
    except _FAILURES as exc:
        return _fail("Failed to clean directory", exc)
    print(f"{_GREEN}Successfully cleaned directory: {args.dir}{_RESET}")
    return 0


def _cmd_scan(args: argparse.Namespace) -> int:
    actions: dict[str, tuple[Callable[[str], None], str]] = {
        "memory": (display_memory_usage, "Failed to retrieve memory usage"),
        "storage": (list_storage_devices, "Failed to list storage devices"),
        "process": (list_processes, "Failed to list processes"),
    }
    if args.target not in actions:
        print("Invalid argument. Use 'memory', 'storage', or 'process'.")
        return 0
    action, failure = actions[args.target]
    return _run_or_watch(lambda: action(args.output), args.watch, failure)


def _add_output_options(parser: argparse.ArgumentParser, watch_help: str) -> None:
    parser.add_argument(
        "-o", "--output", default="txt", help="Output format (txt, json, yaml)"
    )
    parser.add_argument("-w", "--watch", action="store_true", help=watch_help)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the list, clean and scan commands."""
    parser = argparse.ArgumentParser(
        prog="maclnr",
        description=(
            "maclnr provides utilities to list large files, clean directories, "
            "and inspect system information. Most commands support a --watch "
            "mode for continuous updates."
        ),
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"%(prog)s version {VERSION}"
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    list_parser = commands.add_parser(
        "list",
        help="List all files in a directory recursively, ordered by size from big to small",
    )
    list_parser.add_argument("-d", "--dir", default="", help="Directory to list files")
    list_parser.add_argument(
        "--min-size", type=int, default=0, help="Minimum file size in bytes"
    )
    _add_output_options(list_parser, "Watch the directory and refresh every 2 seconds")
    list_parser.set_defaults(handler=_cmd_list)

    clean_parser = commands.add_parser(
        "clean",
        help="Clean a directory by removing .DS_Store files and files larger than a specified size",
    )
    clean_parser.add_argument("-d", "--dir", default="", help="Directory to clean")
    clean_parser.add_argument(
        "--dry-run", action="store_true", help="Dry run (do not delete files)"
    )
    clean_parser.add_argument("--verbose", action="store_true", help="Verbose output")
    clean_parser.add_argument(
        "--confirm", action="store_true", help="Skip confirmation prompt"
    )
    clean_parser.add_argument(
        "--ds-store", action="store_true", help="Only remove .DS_Store files"
    )
    clean_parser.add_argument(
        "--min-size", type=int, default=0, help="Minimum file size in bytes to clean"
    )
    clean_parser.set_defaults(handler=_cmd_clean)

    scan_parser = commands.add_parser(
        "scan", help="Scan and display system information"
    )
    scan_parser.add_argument("target", metavar="memory|storage|process")
    _add_output_options(scan_parser, "Watch the information and refresh every 2 seconds")
    scan_parser.set_defaults(handler=_cmd_scan)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the arguments, run the chosen command and return the exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return 0 if exc.code in (0, None) else 1
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())