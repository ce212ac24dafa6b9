from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel


class TokenUsage(BaseModel):
    model: str
    input_tokens: int = 0
    output_tokens: int = 0

    def ingest(self, usage: Any) -> None:
        """Add the `usage` block of one API response to the running totals."""

        if usage is None:
            return
        self.input_tokens += int(getattr(usage, "input_tokens", 0) or 0)
        self.output_tokens += int(getattr(usage, "output_tokens", 0) or 0)

    def reset(self) -> None:
        self.input_tokens = 0
        self.output_tokens = 0

    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def print_panel(self, console=None):
        """Print a Rich panel with the running token counts to stderr."""

        from rich.console import Console
        from rich.panel import Panel

        console = console or Console(stderr=True)
        usage_text = (
            f"[cyan]Input:[/cyan] {self.input_tokens} tokens | "
            f"[yellow]Output:[/yellow] {self.output_tokens} tokens | "
            f"[green]Total:[/green] {self.total_tokens()} tokens"
        )
        console.print(Panel(usage_text, title=f"Token Usage ({self.model})", border_style="grey37", padding=(0, 1)))


def sanitize_path(path: str) -> str:
    """Expand `~` in a user-supplied path; `-` is passed through for stdin."""

    if path == "-":
        return path
    return os.path.expanduser(path)
