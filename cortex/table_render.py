from __future__ import annotations

from enum import Enum

from cortex.constants import TABLE_BORDER_WIDTH, TABLE_CELL_WIDTH
from cortex.line_classifier import TableRow


class TableState(Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"


def _border(left: str, right: str) -> str:
    return left + "─" * TABLE_BORDER_WIDTH + right + "\n"


TOP_BORDER = _border("┌", "┐")
MIDDLE_BORDER = _border("├", "┤")
BOTTOM_BORDER = _border("└", "┘")


def format_row(cells: tuple[str, ...]) -> str:
    # `^` puts the odd padding column on the right.
    row = " │ ".join(f"{cell:^{TABLE_CELL_WIDTH}}" for cell in cells)
    return f"│ {row} │\n"


class TableRenderer:
    """Box-drawn tables, one row per call.

    The renderer owns only the inside/outside flag. The caller decides when a
    table ends by calling `close()`.
    """

    def __init__(self) -> None:
        self.state = TableState.OUTSIDE

    @property
    def in_table(self) -> bool:
        return self.state is TableState.INSIDE

    def render_row(self, row: TableRow) -> str:
        out = ""
        if not self.in_table:
            self.state = TableState.INSIDE
            out += TOP_BORDER

        if row.is_separator:
            return out + MIDDLE_BORDER
        return out + format_row(row.cells)

    def close(self) -> str:
        """Emit the bottom border if a table is open, else nothing."""
        if not self.in_table:
            return ""
        self.state = TableState.OUTSIDE
        return BOTTOM_BORDER
