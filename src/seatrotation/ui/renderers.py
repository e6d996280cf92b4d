from __future__ import annotations

import io
import json
import sys
from collections.abc import Callable, Sequence
from itertools import zip_longest
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from ..core.errors import ConfigurationError
from ..core.models import Round, Session

__all__ = ["FORMATS", "infer_format", "render_session", "write_output"]

FORMATS = ("json", "grouped", "list")
DEFAULT_FORMAT = "list"

_ROUND_SEPARATOR = "-" * 39
_GROUPS_PER_ROW = 4


def infer_format(requested: str | None, output: str | None) -> str:
    """Explicit format wins; otherwise ``.json`` destinations get JSON."""

    if requested:
        key = requested.strip().lower()
        if key not in FORMATS:
            raise ConfigurationError(f"Unknown format '{requested}'. Options: {', '.join(FORMATS)}")
        return key
    if output and output.lower().endswith(".json"):
        return "json"
    return DEFAULT_FORMAT


def _round_header(index: int) -> str:
    lines = []
    if index:
        lines.extend([_ROUND_SEPARATOR, ""])
    lines.extend([f"Groupings #{index + 1}", ""])
    return "\n".join(lines) + "\n"


def _render_list(session: Session, names: Sequence[str]) -> str:
    out = io.StringIO()
    for index, rnd in enumerate(session):
        out.write(_round_header(index))
        for group in rnd:
            for member in group:
                out.write(f"  {names[member]}\n")
            out.write("\n")
    return out.getvalue()


def _group_table(rnd: Round, start: int, names: Sequence[str]) -> Table:
    chunk = rnd[start : start + _GROUPS_PER_ROW]
    table = Table(box=box.ASCII, show_edge=True, header_style=None, pad_edge=True)
    for offset in range(len(chunk)):
        table.add_column(f"Group {start + offset + 1}", no_wrap=True)
    for row in zip_longest(*chunk):
        table.add_row(*(names[member] if member is not None else "" for member in row))
    return table


def _render_grouped(session: Session, names: Sequence[str]) -> str:
    longest = max((len(name) for name in names), default=0)
    width = max(80, _GROUPS_PER_ROW * (max(longest, len("Group 999")) + 4) + 1)
    buffer = io.StringIO()
    console = Console(file=buffer, width=width, color_system=None, force_terminal=False, highlight=False)
    for index, rnd in enumerate(session):
        buffer.write(_round_header(index))
        for start in range(0, len(rnd), _GROUPS_PER_ROW):
            console.print(_group_table(rnd, start, names))
            console.print()
    return buffer.getvalue()


def _render_json(session: Session, _names: Sequence[str]) -> str:
    data = [[list(group) for group in rnd] for rnd in session]
    return json.dumps(data) + "\n"


_RENDERERS: dict[str, Callable[[Session, Sequence[str]], str]] = {
    "json": _render_json,
    "grouped": _render_grouped,
    "list": _render_list,
}


def render_session(session: Session, names: Sequence[str], fmt: str = DEFAULT_FORMAT) -> str:
    try:
        renderer = _RENDERERS[fmt]
    except KeyError as exc:
        raise ConfigurationError(f"Unknown format '{fmt}'. Options: {', '.join(FORMATS)}") from exc
    return renderer(session, names)


def write_output(text: str, output: str | None) -> None:
    """Write to ``output``; ``None`` or ``-`` means standard output."""

    if not output or output == "-":
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    try:
        with Path(output).open("w", encoding="utf-8") as fh:
            fh.write(text)
    except OSError as exc:
        raise ConfigurationError(f"cannot write output '{output}': {exc}") from exc
