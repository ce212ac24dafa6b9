from __future__ import annotations

"""Classify a single line of an assistant reply.

Classification is purely syntactic and looks at one line at a time. Whether
a line is raw code-block content is decided by the renderer *before* it gets
here, so this module knows nothing about open fences.
"""

from dataclasses import dataclass
from typing import Union

FENCE = "```"


@dataclass(frozen=True)
class FenceMarker:
    language: str


@dataclass(frozen=True)
class Header:
    level: int
    text: str


@dataclass(frozen=True)
class Blockquote:
    text: str


@dataclass(frozen=True)
class TableRow:
    cells: tuple[str, ...]
    is_separator: bool


@dataclass(frozen=True)
class Blank:
    pass


@dataclass(frozen=True)
class Plain:
    text: str


ClassifiedLine = Union[FenceMarker, Header, Blockquote, TableRow, Blank, Plain]

_DELIMITER_ROW_CHARS = frozenset("|-: ")


def is_fence(line: str) -> bool:
    """True for lines opening with exactly three backticks (a fourth disqualifies)."""
    return line.startswith(FENCE) and not line.startswith(FENCE + "`")


def is_closing_fence(line: str) -> bool:
    # Trailing whitespace after the backticks is tolerated; anything else is content.
    return line.rstrip() == FENCE


def _is_delimiter_row(line: str) -> bool:
    # `|---|---|` style rows, which lack the "| " / " |" padding.
    return (
        len(line) > 1
        and line.startswith("|")
        and line.endswith("|")
        and "---" in line
        and set(line) <= _DELIMITER_ROW_CHARS
    )


def split_cells(line: str) -> tuple[str, ...]:
    """Split a table row on `|`.

    Empty pieces are dropped, so an empty cell is indistinguishable from a
    missing one.
    """
    return tuple(cell for cell in (piece.strip() for piece in line.split("|")) if cell)


def classify_line(line: str) -> ClassifiedLine:
    if is_fence(line):
        return FenceMarker(language=line[len(FENCE):].strip())

    if line.startswith("#"):
        level = len(line) - len(line.lstrip("#"))
        return Header(level=level, text=line[level:].strip())

    if line.startswith("> "):
        return Blockquote(text=line[2:])

    if line.startswith("| ") and line.endswith(" |"):
        return TableRow(cells=split_cells(line), is_separator="---" in line)

    if _is_delimiter_row(line):
        return TableRow(cells=split_cells(line), is_separator=True)

    if not line:
        return Blank()

    return Plain(text=line)
