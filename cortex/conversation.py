from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cortex.claude_client import ClaudeClient
from cortex.util import TokenUsage


@dataclass
class Conversation:
    """In-memory chat history for one interactive session.

    History holds the raw reply text, never the rendered ANSI output, so it
    can be sent back to the API as-is.
    """

    client: ClaudeClient
    token_usage: TokenUsage | None = None
    messages: list[dict[str, Any]] = field(default_factory=list)

    def send(self, prompt: str) -> str:
        reply = self.client.send_message_with_history(prompt, self.messages)

        # Only record the turn once the request succeeded.
        self.messages.append({"role": "user", "content": prompt})
        self.messages.append({"role": "assistant", "content": reply.text})

        if self.token_usage is not None:
            self.token_usage.ingest(reply.usage)
        return reply.text

    def clear(self) -> None:
        self.messages = []
        if self.token_usage is not None:
            self.token_usage.reset()
