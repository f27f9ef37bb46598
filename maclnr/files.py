"""Listing files by size and cleaning directories."""

from __future__ import annotations

import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass

from maclnr.output import STRUCTURED_FORMATS, format_structured, render_table

DS_STORE = ".DS_Store"

_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class FileEntry:
    """A regular file and its size in bytes."""

    path: str
    size: int


class WalkError(Exception):
    """Raised when part of a directory tree cannot be read."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"walking {path}: {cause}")
        self.path = path
        self.cause = cause


def _walk(path: str) -> Iterator[tuple[str, os.stat_result]]:
    """Yield every path under and including path, in lexical order, without following links."""
    try:
        info = os.lstat(path)
    except OSError as exc:
        raise WalkError(path, exc) from exc
    yield path, info
    if stat.S_ISDIR(info.st_mode):
        try:
            names = sorted(os.listdir(path))
        except OSError as exc:
            raise WalkError(path, exc) from exc
        for name in names:
            yield from _walk(os.path.join(path, name))


def _is_dir(info: os.stat_result) -> bool:
    return stat.S_ISDIR(info.st_mode)


def list_files_by_size(directory: str, min_size: int = 0) -> list[FileEntry]:
    """Return the files under directory of at least min_size bytes, largest first."""
    entries = [
        FileEntry(path, info.st_size)
        for path, info in _walk(directory)
        if not _is_dir(info) and info.st_size >= min_size
    ]
    entries.sort(key=lambda entry: entry.size, reverse=True)
    return entries


def list_files(directory: str, min_size: int = 0, output_format: str = "txt") -> None:
    """Print the files under directory, largest first, as a table, JSON or YAML."""
    entries = list_files_by_size(directory, min_size)
    if output_format == "json":
        records = [{"Path": e.path, "Size": e.size} for e in entries]
        print(format_structured(records, output_format))
    elif output_format in STRUCTURED_FORMATS:
        records = [{"path": e.path, "size": e.size} for e in entries]
        print(format_structured(records, output_format))
    else:
        table = render_table(["Path", "Size (bytes)"], [[e.path, str(e.size)] for e in entries])
        print(table, end="")


def clean_dir(
    directory: str,
    dry_run: bool = False,
    verbose: bool = False,
    remove_ds: bool = False,
    min_size: int = 0,
) -> None:
    """Remove .DS_Store entries (if asked) and every file of at least min_size bytes."""
    for path, info in _walk(directory):
        name = os.path.basename(os.path.normpath(path))

        if remove_ds and name == DS_STORE:
            if dry_run:
                print(f"{_YELLOW}[Dry Run]{_RESET} Would remove: {path}")
            else:
                os.remove(path)
                if verbose:
                    print(f"{_GREEN}Removed: {path}{_RESET}")
            continue

        if not _is_dir(info) and info.st_size >= min_size:
            if dry_run:
                print(f"{_YELLOW}[Dry Run]{_RESET} Would remove: {path} ({info.st_size} bytes)")
            else:
                os.remove(path)
                if verbose:
                    print(f"{_GREEN}Removed: {path} ({info.st_size} bytes){_RESET}")