"""
Plain-text table rendering for the inspector output.
Box-drawing borders, bold header when colour is on.
"""
from typing import List, Sequence

from ..models.field_row import HEADERS, FieldRow

BOLD = "\x1b[1m"
RESET = "\x1b[0m"

# Column index -> alignment; everything else is left-aligned
_ALIGN = {1: ">", 2: ">", 3: ">", 4: ">", 8: "^"}


def _cell(text: str, width: int, idx: int) -> str:
    return f"{text:{_ALIGN.get(idx, '<')}{width}}"


def _rule(widths: Sequence[int], left: str, mid: str, right: str) -> str:
    return left + mid.join("─" * (w + 2) for w in widths) + right


def _line(cells: Sequence[str]) -> str:
    return "│" + "│".join(f" {c} " for c in cells) + "│"


def render_table(rows: Sequence[FieldRow], color: bool = False) -> str:
    widths = [len(h) for h in HEADERS]
    for row in rows:
        for i, value in enumerate(row):
            widths[i] = max(widths[i], len(value))

    header_cells = [_cell(h, widths[i], i) for i, h in enumerate(HEADERS)]
    if color:
        header_cells = [f"{BOLD}{c}{RESET}" for c in header_cells]

    lines: List[str] = [
        _rule(widths, "┌", "┬", "┐"),
        _line(header_cells),
        _rule(widths, "├", "┼", "┤"),
    ]
    for row in rows:
        lines.append(_line([_cell(v, widths[i], i) for i, v in enumerate(row)]))
    lines.append(_rule(widths, "└", "┴", "┘"))
    return "\n".join(lines)
