from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable


@dataclass(frozen=True)
class CommandSpec:
    name: str
    usage: str
    help: str
    # Returns False when the loop should stop.
    run: Callable[[str], bool]


def format_help(commands: Iterable[CommandSpec]) -> str:
    """One line per command, sorted by name, with help text in one column.

    A usage that only repeats the name is printed as the name alone; longer
    usages get their own line with the help indented beneath.
    """

    specs = sorted(commands, key=lambda c: c.name)
    width = max((len(c.name) for c in specs), default=0)
    lines = ["Available commands:"]
    for c in specs:
        if c.usage == c.name:
            lines.append(f"  {c.name.ljust(width)}  {c.help}")
        else:
            lines.append(f"  {c.usage}")
            lines.append(f"  {' ' * width}  {c.help}")
    return "\n".join(lines) + "\n"


def filter_prefix(candidates: Iterable[str], *, prefix: str) -> list[str]:
    return [c for c in candidates if c.startswith(prefix)]


def split_command(text: str) -> tuple[str, str] | None:
    """Split `/cmd rest...` into (cmd, rest); None for ordinary chat input."""

    s = text.strip()
    if not s.startswith("/"):
        return None
    cmd, *rest = s.split(maxsplit=1)
    return cmd, rest[0] if rest else ""


def is_exit_word(text: str) -> bool:
    return text.strip().lower() == "exit"


def build_completer(commands: Iterable[CommandSpec]):
    """prompt_toolkit completer for slash command names."""

    from prompt_toolkit.completion import Completer, Completion

    names = sorted(c.name for c in commands)

    class _SlashCompleter(Completer):
        def get_completions(self, document, complete_event):
            text = document.text_before_cursor
            if not text.startswith("/") or " " in text:
                return
            for name in filter_prefix(names, prefix=text):
                yield Completion(name, start_position=-len(text))

    return _SlashCompleter()
