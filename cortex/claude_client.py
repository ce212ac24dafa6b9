from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

import requests
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.markup import escape

from cortex.constants import ANTHROPIC_API_URL, ANTHROPIC_VERSION, DEFAULT_MAX_TOKENS, DEFAULT_MODEL, DEFAULT_TIMEOUT


class ClaudeAPIError(RuntimeError):
    """Raised when a Messages API call fails or returns an unusable body."""


class Usage(BaseModel):
    input_tokens: int
    output_tokens: int


class Content(BaseModel):
    type: str
    text: str = ""


class SuccessResponse(BaseModel):
    id: str
    type: str
    role: str
    model: str
    content: list[Content]
    stop_reason: Optional[str] = None
    stop_sequence: Optional[str] = None
    usage: Usage


class ErrorDetails(BaseModel):
    type: str
    message: str


class ErrorResponse(BaseModel):
    type: str
    error: ErrorDetails


@dataclass(frozen=True)
class ChatReply:
    text: str
    usage: Usage


def parse_response(body: str) -> SuccessResponse:
    """Parse a Messages API body, raising ClaudeAPIError for error payloads."""

    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        raise ClaudeAPIError(f"Failed to parse API response: {e}") from e

    try:
        return SuccessResponse.model_validate(payload)
    except ValidationError:
        pass

    try:
        err = ErrorResponse.model_validate(payload)
    except ValidationError as e:
        raise ClaudeAPIError("Failed to parse API response") from e
    raise ClaudeAPIError(f"{err.error.type}: {err.error.message}")


@dataclass
class ClaudeClient:
    api_key: str
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    api_url: str = ANTHROPIC_API_URL
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False
    session: requests.Session = field(default_factory=requests.Session)
    console: Console = field(default_factory=lambda: Console(stderr=True))

    def __post_init__(self) -> None:
        self.session.headers.update(
            {
                "x-api-key": self.api_key,
                "anthropic-version": ANTHROPIC_VERSION,
                "content-type": "application/json",
            }
        )

    def _echo(self, label: str, body: str, style: str) -> None:
        if not self.debug:
            return
        self.console.print(label, style=style)
        self.console.print(escape(body), style=style, highlight=False)

    def create_message(self, messages: Iterable[dict[str, Any]]) -> SuccessResponse:
        request = {
            "model": self.model,
            "messages": list(messages),
            "max_tokens": self.max_tokens,
        }
        self._echo("Request:", json.dumps(request, indent=2, ensure_ascii=False), "yellow")

        try:
            resp = self.session.post(f"{self.api_url}/messages", json=request, timeout=self.timeout)
        except requests.RequestException as e:
            raise ClaudeAPIError(f"Failed to send request: {e}") from e

        if self.debug:
            self.console.print(f"Status: {resp.status_code}", style="cyan")
        self._echo("Response:", resp.text, "magenta")

        response = parse_response(resp.text)

        if self.debug:
            self.console.print(
                f"Tokens used: {response.usage.input_tokens} input, {response.usage.output_tokens} output",
                style="bright_black",
            )
        return response

    def send_message_with_history(self, prompt: str, history: Iterable[dict[str, Any]]) -> ChatReply:
        """Send `prompt` after `history` and return the raw (unrendered) reply."""

        messages = [*history, {"role": "user", "content": prompt}]
        response = self.create_message(messages)

        if not response.content:
            raise ClaudeAPIError("No content in response")
        return ChatReply(text=response.content[0].text, usage=response.usage)

    def send_message(self, prompt: str) -> ChatReply:
        return self.send_message_with_history(prompt, [])
