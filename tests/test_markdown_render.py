import re

from rich.style import Style

from cortex.constants import BLOCKQUOTE_STYLE, HEADER_STYLE
from cortex.markdown_render import CodeBlockState, RenderState, print_markdown, render_markdown
from cortex.spans import SpanKind
from cortex.table_render import BOTTOM_BORDER, MIDDLE_BORDER, TOP_BORDER, format_row

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def _strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def _header(text: str) -> str:
    return Style.parse(HEADER_STYLE).render(text) + "\n"


def test_plain_lines_render_as_themselves():
    text = "hello world\n  indented - item\nlast line"
    assert render_markdown(text) == "hello world\n  indented - item\nlast line\n"


def test_empty_input_renders_nothing():
    assert render_markdown("") == ""


def test_crlf_line_endings_are_normalized():
    assert render_markdown("a\r\nb\r\n") == "a\nb\n"


def test_headers_strip_hashes():
    assert render_markdown("### Title") == _header("Title")
    assert render_markdown("#Title") == _header("Title")
    assert render_markdown("###### Title") == _header("Title")
    assert render_markdown("######### Title") == _header("Title")


def test_header_does_not_run_inline_scan():
    assert render_markdown("# **not bold**") == _header("**not bold**")


def test_blockquote_prefix():
    out = render_markdown("> quoted")
    assert out == "│ " + Style.parse(BLOCKQUOTE_STYLE).render("quoted") + "\n"
    assert out.startswith("│ ")


def test_inline_spans_on_plain_lines():
    out = render_markdown("**x** *y* `z`")
    assert out == (
        SpanKind.BOLD.style.render("x")
        + " "
        + SpanKind.ITALIC.style.render("y")
        + " "
        + SpanKind.CODE.style.render("z")
        + "\n"
    )


def test_blank_line_outside_table_is_a_newline():
    assert render_markdown("a\n\nb") == "a\n\nb\n"


def test_table_sequence():
    text = "| a | b |\n|---|---|\n| 1 | 2 |\n\n"
    assert render_markdown(text) == (
        TOP_BORDER + format_row(("a", "b")) + MIDDLE_BORDER + format_row(("1", "2")) + BOTTOM_BORDER
    )


def test_table_closed_at_end_of_input():
    assert render_markdown("| a | b |") == TOP_BORDER + format_row(("a", "b")) + BOTTOM_BORDER


def test_non_table_line_closes_open_table():
    out = render_markdown("| a |\nafter")
    assert out == TOP_BORDER + format_row(("a",)) + BOTTOM_BORDER + "after\n"

    out = render_markdown("| a |\n# Next")
    assert out == TOP_BORDER + format_row(("a",)) + BOTTOM_BORDER + _header("Next")


def test_two_tables_separated_by_blank():
    out = render_markdown("| a |\n\n| b |")
    assert out == (
        TOP_BORDER + format_row(("a",)) + BOTTOM_BORDER + TOP_BORDER + format_row(("b",)) + BOTTOM_BORDER
    )


def test_fenced_block_with_plain_language():
    assert render_markdown("```text\nhello\n```") == "\nhello\n\n"


def test_fenced_block_with_unknown_language_degrades_to_plain():
    assert render_markdown("```nope-lang\nhello\n```") == "\nhello\n\n"


def test_fenced_block_is_highlighted():
    out = render_markdown("before\n```python\nx = 1\n```\nafter")
    assert "38;2;" in out
    assert _strip_ansi(out) == "before\n\nx = 1\n\nafter\n"


def test_unterminated_fence_is_dropped():
    assert render_markdown("```lang\nhello") == ""
    assert render_markdown("before\n```lang\nhello\nworld") == "before\n"


def test_empty_fence_emits_nothing():
    assert render_markdown("```\n```\nx") == "x\n"


def test_markup_inside_code_block_is_raw():
    out = render_markdown("```\n# not a header\n| a |\n**b**\n\n```")
    assert out == "\n# not a header\n| a |\n**b**\n\n\n"


def test_fence_with_language_inside_block_is_content():
    out = render_markdown("```\n```js\n```")
    assert out == "\n```js\n\n"


def test_fence_closes_open_table_and_freezes_table_state():
    out = render_markdown("| a |\n```\n| b |\n```\n")
    assert out == TOP_BORDER + format_row(("a",)) + BOTTOM_BORDER + "\n| b |\n\n"


def test_render_state_transitions():
    state = RenderState()
    assert not state.in_code_block and not state.in_table

    state.open_code_block("text")
    assert state.code_state is CodeBlockState.OPEN
    state.code_buffer.append("hi\n")

    assert state.close_code_block() == "\nhi\n\n"
    assert state.code_state is CodeBlockState.CLOSED
    assert state.code_buffer == []


def test_render_state_is_not_shared_between_calls():
    # An unterminated fence in one call must not leak into the next.
    render_markdown("```\nleft open")
    assert render_markdown("plain") == "plain\n"


def test_print_markdown_writes_to_stdout(capsys):
    print_markdown("# Hi\nthere")
    out = capsys.readouterr().out
    assert _strip_ansi(out) == "Hi\nthere\n"


def test_closing_fence_tolerates_trailing_whitespace():
    assert render_markdown("```\nhi\n```   \nafter") == "\nhi\n\nafter\n"
