"""Terminal output helpers: tables, structured formats and watch mode."""

from __future__ import annotations

import json
import logging
import re
import sys
import time
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TextIO

import yaml

CLEAR_SCREEN = "\033[H\033[2J"
STRUCTURED_FORMATS = ("json", "yaml")
DEFAULT_INTERVAL = 2.0

_NUMERIC = re.compile(r"^-?\d+\.?\d*$")

log = logging.getLogger(__name__)


def clear_screen(stream: TextIO | None = None) -> None:
    """Move the cursor home and clear the terminal."""
    out = stream if stream is not None else sys.stdout
    out.write(CLEAR_SCREEN)
    out.flush()


def _title(header: str) -> str:
    return header.replace("_", " ").upper().strip()


def _center(text: str, width: int) -> str:
    gap = width - len(text)
    left = gap // 2
    return " " * left + text + " " * (gap - left)


def _align(text: str, width: int) -> str:
    if _NUMERIC.match(text):
        return text.rjust(width)
    return text.ljust(width)


def render_table(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Render rows as a bordered text table with an upper-case header."""
    titles = [_title(h) for h in headers]
    count = len(titles)
    body = []
    for row in rows:
        cells = [str(cell) for cell in row][:count]
        cells.extend("" for _ in range(count - len(cells)))
        body.append(cells)

    widths = [len(t) for t in titles]
    for cells in body:
        widths = [max(w, len(c)) for w, c in zip(widths, cells)]

    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(cells: Iterable[str]) -> str:
        return "|" + "|".join(f" {c} " for c in cells) + "|"

    lines = [border, line(_center(t, w) for t, w in zip(titles, widths)), border]
    lines.extend(line(_align(c, w) for c, w in zip(cells, widths)) for cells in body)
    lines.append(border)
    return "\n".join(lines) + "\n"


def format_structured(data: Any, output_format: str) -> str:
    """Serialise data as indented JSON or as YAML."""
    if output_format == "json":
        return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False)
    if output_format == "yaml":
        return yaml.safe_dump(
            data, default_flow_style=False, sort_keys=True, allow_unicode=True
        )
    raise ValueError(f"unsupported structured output format: {output_format!r}")


def watch(refresh: Callable[[], Any], interval: float = DEFAULT_INTERVAL) -> None:
    """Clear the screen and call refresh every interval seconds, forever.

    Errors raised by refresh are logged and the loop goes on.
    """
    while True:
        time.sleep(interval)
        clear_screen()
        try:
            refresh()
        except Exception as exc:  # noqa: BLE001 - keep watching after failures
            log.error("refresh failed: %s", exc)