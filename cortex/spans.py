from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rich.style import Style

from cortex.constants import BOLD_STYLE, INLINE_CODE_STYLE, ITALIC_STYLE


class SpanKind(Enum):
    """Inline markup kinds as (delimiter, rich style).

    Declaration order is also match priority: `**` must be tried before `*`.
    """

    BOLD = ("**", BOLD_STYLE)
    ITALIC = ("*", ITALIC_STYLE)
    CODE = ("`", INLINE_CODE_STYLE)

    @property
    def delimiter(self) -> str:
        return self.value[0]

    @property
    def style(self) -> Style:
        return Style.parse(self.value[1])


@dataclass(frozen=True)
class Span:
    """A run of `text[start:end]`; `kind` is None for literal text."""

    kind: Optional[SpanKind]
    start: int
    end: int


def _opening_at(text: str, pos: int) -> SpanKind | None:
    for kind in SpanKind:
        if text.startswith(kind.delimiter, pos):
            return kind
    return None


def find_spans(text: str) -> list[Span]:
    """Single forward scan splitting `text` into literal and styled spans.

    Styled spans cover only the enclosed content; the delimiters themselves
    fall between spans and are dropped on render. Contents are not rescanned,
    so markup does not nest. An opening delimiter without a partner stays in
    the surrounding literal run.
    """
    spans: list[Span] = []
    literal_start = 0
    pos = 0

    while pos < len(text):
        kind = _opening_at(text, pos)
        if kind is None:
            pos += 1
            continue

        width = len(kind.delimiter)
        close = text.find(kind.delimiter, pos + width)
        if close == -1:
            pos += width
            continue

        if literal_start < pos:
            spans.append(Span(None, literal_start, pos))
        spans.append(Span(kind, pos + width, close))
        pos = close + width
        literal_start = pos

    if literal_start < len(text):
        spans.append(Span(None, literal_start, len(text)))

    return spans


def format_spans(text: str) -> str:
    """Render inline bold/italic/code markup in one line to ANSI."""
    parts: list[str] = []
    for span in find_spans(text):
        chunk = text[span.start:span.end]
        if span.kind is None:
            parts.append(chunk)
        else:
            parts.append(span.kind.style.render(chunk))
    return "".join(parts)
