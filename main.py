import argparse
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.text import Text

from cortex.claude_client import ClaudeAPIError, ClaudeClient
from cortex.commands import CommandSpec, build_completer, format_help, is_exit_word, split_command
from cortex.config import ConfigError, Settings
from cortex.constants import BANNER_TEXT, BLUE, ORANGE, PROMPT_TEXT, PURPLE
from cortex.conversation import Conversation
from cortex.markdown_render import print_markdown
from cortex.util import TokenUsage, sanitize_path

ANSWER_HEADER = "\n"


def _status(console: Console, message: str, color: str) -> None:
    console.print(Text(message, style=f"{color} on black"))


def _print_banner(console: Console) -> None:
    colors = (ORANGE, BLUE, PURPLE)
    for i, line in enumerate(BANNER_TEXT.splitlines()):
        console.print(Text(line, style=f"{colors[i % 3]} on black"), highlight=False)
    console.print()
    _status(console, "[ CORTEX NEURAL INTERFACE INITIALIZED ]", BLUE)


def _build_client(settings: Settings) -> ClaudeClient:
    return ClaudeClient(
        api_key=settings.require_api_key(),
        model=settings.model,
        max_tokens=settings.max_tokens,
        api_url=settings.api_url,
        timeout=settings.timeout,
        debug=settings.debug,
    )


def _build_prompt_session(completer=None):
    # Local import to avoid prompt_toolkit import cost for --render.
    from prompt_toolkit import PromptSession

    return PromptSession(completer=completer)


def _prompt_boxed(session) -> str:
    """Prompt for one line of input.

    Visual:

        CORTEX://> your input…
    """

    from prompt_toolkit.formatted_text import FormattedText
    from prompt_toolkit.styles import Style

    style = Style.from_dict({"prompt": "fg:#ff8000 bg:#000000 bold"})
    prompt = FormattedText([("", "\n"), ("class:prompt", PROMPT_TEXT)])
    return session.prompt(prompt, style=style)


def _render_file(path: str, err_console: Console) -> int:
    path = sanitize_path(path)
    try:
        if path == "-":
            text = sys.stdin.read()
        else:
            text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _status(err_console, f"[ FATAL ERROR ] {e}", ORANGE)
        return 1

    print_markdown(text)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Cortex: chat with Claude from the terminal")
    parser.add_argument("--model", "-m", default=None, help="Model id (overrides CORTEX_MODEL).")
    parser.add_argument(
        "--max-tokens",
        type=int,
        default=None,
        help="Maximum tokens per reply (overrides CORTEX_MAX_TOKENS).",
    )
    parser.add_argument(
        "--single",
        "-s",
        action="store_true",
        help="Run single invocation without prompting for more input",
    )
    parser.add_argument(
        "--render",
        metavar="PATH",
        default=None,
        help="Render a markdown file ('-' for stdin) to the terminal and exit.",
    )
    parser.add_argument("query", nargs="*", help="Query to process")

    args = parser.parse_args(argv)

    console = Console()
    err_console = Console(stderr=True)

    if args.render is not None:
        return _render_file(args.render, err_console)

    # Variables already set in the environment win over .env entries.
    load_dotenv(find_dotenv(usecwd=True))
    settings = Settings.from_env()
    if args.model:
        settings = replace(settings, model=args.model)
    if args.max_tokens and args.max_tokens > 0:
        settings = replace(settings, max_tokens=args.max_tokens)

    try:
        client = _build_client(settings)
    except ConfigError as e:
        _status(err_console, f"[ FATAL ERROR ] {e}", ORANGE)
        return 1

    token_usage = TokenUsage(model=settings.model)
    conversation = Conversation(client=client, token_usage=token_usage)

    def _cmd_help(_rest: str) -> bool:
        print(format_help(commands), end="")
        return True

    def _cmd_clear(_rest: str) -> bool:
        conversation.clear()
        print("Conversation history cleared.")
        return True

    def _cmd_exit(_rest: str) -> bool:
        return False

    commands = [
        CommandSpec(name="/help", usage="/help", help="Show available commands.", run=_cmd_help),
        CommandSpec(name="/clear", usage="/clear", help="Forget the conversation so far.", run=_cmd_clear),
        CommandSpec(name="/exit", usage="/exit", help="Quit (same as `exit` or Ctrl-D).", run=_cmd_exit),
    ]
    commands_by_name = {c.name: c for c in commands}

    if not args.single:
        _print_banner(console)

    session = None
    pending = " ".join(args.query) if args.query else None

    while True:
        if pending is not None:
            user_input, pending = pending, None
        else:
            if session is None:
                session = _build_prompt_session(build_completer(commands))
            try:
                user_input = _prompt_boxed(session)
            except KeyboardInterrupt:
                _status(console, "[ NEURAL LINK INTERRUPTED ]", PURPLE)
                return 0
            except EOFError:
                _status(console, "[ NEURAL LINK TERMINATED ]", PURPLE)
                return 0

        user_input = user_input.strip()
        if not user_input:
            continue

        if is_exit_word(user_input):
            _status(console, "[ NEURAL LINK TERMINATED ]", PURPLE)
            return 0

        parsed = split_command(user_input)
        if parsed is not None:
            cmd, rest = parsed
            spec = commands_by_name.get(cmd)
            if spec is None:
                print(f"Unknown command: {cmd} (try /help)")
                continue
            if not spec.run(rest):
                _status(console, "[ NEURAL LINK TERMINATED ]", PURPLE)
                return 0
            continue

        try:
            reply = conversation.send(user_input)
        except ClaudeAPIError as e:
            err_console.print(
                Text("[ NEURAL LINK ERROR ] ", style=f"{ORANGE} on black"),
                Text(str(e), style="bright_red on black"),
                sep="",
            )
            if args.single:
                return 1
            continue

        print(ANSWER_HEADER, end="")
        print_markdown(reply)
        token_usage.print_panel(err_console)

        if args.single:
            return 0


if __name__ == "__main__":
    raise SystemExit(main())
