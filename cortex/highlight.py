from __future__ import annotations

"""Syntax highlighting for fenced code blocks.

Language tokens are resolved against Pygments' lexer registry and colored with
one fixed theme. The lookup table and theme are built once per process and
shared read-only by every render call.
"""

import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from pygments.lexer import Lexer
from pygments.lexers import get_all_lexers, get_lexer_by_name
from pygments.lexers.special import TextLexer
from rich.style import Style
from rich.syntax import Syntax, SyntaxTheme

from cortex.constants import CODE_THEME

_GLOB_CHARS = frozenset("*?[]")


@dataclass(frozen=True)
class SyntaxDatabase:
    # language token (alias or file extension) -> canonical lexer alias
    tokens: Mapping[str, str]
    theme: SyntaxTheme

    def lexer_for(self, language_token: str) -> Lexer:
        """Return a lexer for the token, or a plain-text lexer if unknown.

        Matching is case-sensitive; Pygments' own lookup is not, so the
        token is checked against our table first.
        """
        alias = self.tokens.get(language_token)
        if alias is None:
            return TextLexer()
        return get_lexer_by_name(alias, stripnl=False, ensurenl=False)


_SYNTAX_DB: SyntaxDatabase | None = None
_SYNTAX_DB_LOCK = threading.Lock()


def _build_token_table() -> dict[str, str]:
    tokens: dict[str, str] = {}
    extensions: dict[str, str] = {}

    for _name, aliases, filenames, _mimetypes in get_all_lexers():
        if not aliases:
            continue
        canonical = aliases[0]
        for alias in aliases:
            tokens.setdefault(alias, canonical)
        for pattern in filenames:
            if not pattern.startswith("*."):
                continue
            ext = pattern[2:]
            if ext and not (_GLOB_CHARS & set(ext)):
                extensions.setdefault(ext, canonical)

    # Aliases win over extensions (`md` is an extension, `markdown` an alias).
    for ext, canonical in extensions.items():
        tokens.setdefault(ext, canonical)
    return tokens


def load_syntax_database() -> SyntaxDatabase:
    """Return the shared syntax database, building it on first use.

    Safe to call from multiple threads.
    """

    global _SYNTAX_DB

    if _SYNTAX_DB is not None:
        return _SYNTAX_DB

    with _SYNTAX_DB_LOCK:
        if _SYNTAX_DB is None:
            _SYNTAX_DB = SyntaxDatabase(
                tokens=MappingProxyType(_build_token_table()),
                theme=Syntax.get_theme(CODE_THEME),
            )

    return _SYNTAX_DB


def _foreground(style: Style) -> Style:
    # Drop the theme's background so code sits on the terminal's own.
    return Style(color=style.color, bold=style.bold, italic=style.italic, underline=style.underline)


def highlight(code: str, language_token: str) -> str:
    """Return `code` with 24-bit ANSI colors for `language_token`.

    Unknown tokens (including "") fall back to plain text, which comes back
    uncolored. Line terminators are preserved and no escape sequence spans a
    line break.

    Pygments drops a leading BOM and rewrites a lone "\\r" to "\\n" before
    lexing. Token text is therefore sliced back out of `code` so those
    characters reach the output unchanged.
    """

    db = load_syntax_database()
    lexer = db.lexer_for(language_token)
    if isinstance(lexer, TextLexer):
        return code

    bom = "\ufeff" if code.startswith("\ufeff") else ""
    source = code[len(bom):]
    tokens = list(lexer.get_tokens(source))
    # "\r\n" collapses to one character, so offsets only line up without it.
    if "\r\n" not in source and sum(len(value) for _, value in tokens) == len(source):
        pos = 0
        for i, (token_type, value) in enumerate(tokens):
            tokens[i] = (token_type, source[pos : pos + len(value)])
            pos += len(value)

    out: list[str] = [bom]
    for token_type, value in tokens:
        style = _foreground(db.theme.get_style_for_token(token_type))
        for piece in value.splitlines(keepends=True):
            body = piece.rstrip("\r\n")
            out.append(style.render(body))
            out.append(piece[len(body):])
    return "".join(out)
