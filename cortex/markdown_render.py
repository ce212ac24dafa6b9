from __future__ import annotations

"""Markdown rendering helpers for terminal output.

Replies from the model are rendered line by line into a single ANSI string.
This is deliberately not a CommonMark parser: it understands fenced code,
headers, blockquotes, pipe tables and `**bold**` / `*italic*` / `` `code` ``
spans, and passes everything else through untouched.

Two pieces of state carry across lines: whether a code fence is open and
whether a table is open. The fence check always runs first, so table state is
frozen while a code block is being buffered.

Known contract: a code fence still open at end of input is dropped without
rendering, while an open table gets its bottom border.
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from rich.style import Style

from cortex.constants import BLOCKQUOTE_STYLE, HEADER_STYLE
from cortex.highlight import highlight
from cortex.line_classifier import (
    Blank,
    Blockquote,
    ClassifiedLine,
    FenceMarker,
    Header,
    TableRow,
    classify_line,
    is_closing_fence,
)
from cortex.spans import format_spans
from cortex.table_render import TableRenderer


class CodeBlockState(Enum):
    CLOSED = "closed"
    OPEN = "open"


@dataclass
class RenderState:
    code_state: CodeBlockState = CodeBlockState.CLOSED
    code_language: str = ""
    code_buffer: list[str] = field(default_factory=list)
    table: TableRenderer = field(default_factory=TableRenderer)

    @property
    def in_code_block(self) -> bool:
        return self.code_state is CodeBlockState.OPEN

    @property
    def in_table(self) -> bool:
        return self.table.in_table

    def open_code_block(self, language: str) -> None:
        self.code_state = CodeBlockState.OPEN
        self.code_language = language
        self.code_buffer = []

    def close_code_block(self) -> str:
        code = "".join(self.code_buffer)
        language = self.code_language
        self.code_state = CodeBlockState.CLOSED
        self.code_language = ""
        self.code_buffer = []

        if not code:
            return ""
        return "\n" + highlight(code, language) + "\n"


def _iter_lines(text: str) -> Iterator[str]:
    """Split on `\\n` only, dropping a trailing `\\r` and the final empty line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    for line in lines:
        yield line[:-1] if line.endswith("\r") else line


def _render_header(header: Header) -> str:
    return Style.parse(HEADER_STYLE).render(header.text) + "\n"


def _render_blockquote(quote: Blockquote) -> str:
    return "│ " + Style.parse(BLOCKQUOTE_STYLE).render(quote.text) + "\n"


def _render_classified(state: RenderState, line: ClassifiedLine) -> str:
    if isinstance(line, TableRow):
        return state.table.render_row(line)

    # Anything that is not a table row ends an open table first.
    out = state.table.close()

    if isinstance(line, FenceMarker):
        state.open_code_block(line.language)
        return out
    if isinstance(line, Header):
        return out + _render_header(line)
    if isinstance(line, Blockquote):
        return out + _render_blockquote(line)
    if isinstance(line, Blank):
        # A blank line that closed a table is consumed by the bottom border.
        return out or "\n"
    return out + format_spans(line.text) + "\n"


def render_markdown(text: str) -> str:
    """Render a complete reply to an ANSI string. Never raises."""

    state = RenderState()
    out: list[str] = []

    for line in _iter_lines(text):
        if state.in_code_block:
            if is_closing_fence(line):
                out.append(state.close_code_block())
            else:
                state.code_buffer.append(line + "\n")
            continue

        out.append(_render_classified(state, classify_line(line)))

    # Unterminated fences are dropped; open tables are closed.
    out.append(state.table.close())
    return "".join(out)


def print_markdown(text: str) -> None:
    sys.stdout.write(render_markdown(text))
    sys.stdout.flush()
