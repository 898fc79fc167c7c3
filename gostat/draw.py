"""Cell-level drawing primitives: text, borders, titled boxes and bars.

Every function writes through a ``Canvas`` (anything with ``set_cell``), so
the same code draws into the curses back buffer, a clipping ``Region`` or a
test buffer. Glyphs are Unicode code points, one cell each.
"""

from __future__ import annotations

from typing import Protocol

from gostat.layout import Rect
from gostat.screen import Color, Style

BAR_FILL = "█"
BAR_EMPTY = "░"
ELLIPSIS = "..."

BORDER_STYLE = Style(Color.LIGHT_CORAL)
TITLE_STYLE = Style(Color.YELLOW, bold=True)
GRAY = Style(Color.GRAY)


class Canvas(Protocol):
    def set_cell(self, x: int, y: int, glyph: str, style: Style = ...) -> None: ...


class Region:
    """Clipping view: forwards only the writes that fall inside ``rect``."""

    def __init__(self, canvas: Canvas, rect: Rect) -> None:
        self._canvas = canvas
        self.rect = rect

    def set_cell(self, x: int, y: int, glyph: str, style: Style = Style()) -> None:
        if self.rect.contains(x, y):
            self._canvas.set_cell(x, y, glyph, style)


def _half(n: int) -> int:
    """Halve toward zero, so negative offsets round like positive ones."""
    return int(n / 2)


# ── Text ───────────────────────────────────────────────────────────────────


def truncate(text: str, width: int) -> str:
    """Fit ``text`` into ``width`` glyphs, marking the cut with an ellipsis."""
    if len(text) <= width:
        return text
    if width < len(ELLIPSIS) + 1:
        return text[: max(0, width)]
    return text[: width - len(ELLIPSIS)] + ELLIPSIS


def draw_text(canvas: Canvas, x: int, y: int, max_width: int, text: str, style: Style) -> int:
    """Write ``text`` left to right, at most ``max_width`` glyphs. Returns glyphs written."""
    count = 0
    for i, glyph in enumerate(text):
        if i >= max_width:
            break
        canvas.set_cell(x + i, y, glyph, style)
        count += 1
    return count


def draw_centered_text(canvas: Canvas, x: int, y: int, width: int, text: str, style: Style) -> int:
    """Center ``text`` in ``width`` columns; longer text starts at ``x`` and is cut."""
    if len(text) > width:
        return draw_text(canvas, x, y, width, text, style)
    return draw_text(canvas, x + (width - len(text)) // 2, y, width, text, style)


def draw_centered_block(
    canvas: Canvas, rect: Rect, lines: list[str], style: Style = Style()
) -> None:
    """Center every line horizontally and the block vertically."""
    start_y = rect.y + _half(rect.height - len(lines))
    for i, line in enumerate(lines):
        if i >= rect.height:
            break
        draw_centered_text(canvas, rect.x, start_y + i, rect.width, line, style)


def draw_aligned_block(
    canvas: Canvas, rect: Rect, lines: list[str], style: Style = Style()
) -> None:
    """Left-align the lines and center the block vertically."""
    start_y = rect.y + _half(rect.height - len(lines))
    for i, line in enumerate(lines):
        if i >= rect.height:
            break
        draw_text(canvas, rect.x, start_y + i, rect.width, line, style)


# ── Boxes ──────────────────────────────────────────────────────────────────


def draw_border(canvas: Canvas, x1: int, y1: int, x2: int, y2: int, style: Style = BORDER_STYLE) -> None:
    """ASCII frame from (x1, y1) to (x2, y2), both corners inclusive."""
    for x in range(x1, x2 + 1):
        canvas.set_cell(x, y1, "-", style)
        canvas.set_cell(x, y2, "-", style)
    for y in range(y1, y2 + 1):
        canvas.set_cell(x1, y, "|", style)
        canvas.set_cell(x2, y, "|", style)
    for x, y in ((x1, y1), (x2, y1), (x1, y2), (x2, y2)):
        canvas.set_cell(x, y, "+", style)


def draw_box(canvas: Canvas, rect: Rect, title: str) -> None:
    """Bordered box with ``title`` written over the middle of its top edge."""
    if rect.is_empty:
        return
    draw_border(canvas, rect.x, rect.y, rect.right, rect.bottom)
    draw_text(canvas, rect.x + _half(rect.width - len(title)), rect.y, rect.width, title, TITLE_STYLE)


# ── Bars ───────────────────────────────────────────────────────────────────


def filled_cells(width: int, value: float, maximum: float) -> int:
    """Number of filled cells for ``value`` on a ``maximum`` scale."""
    if width <= 0 or maximum <= 0:
        return 0
    value = min(max(value, 0.0), maximum)
    return int(width * value / maximum)


def draw_bar(
    canvas: Canvas, x: int, y: int, width: int, value: float, maximum: float, color: Color
) -> None:
    """Horizontal bar: filled cells in ``color``, the rest as gray filler."""
    filled = filled_cells(width, value, maximum)
    fill_style = Style(color)
    for i in range(max(0, width)):
        if i < filled:
            canvas.set_cell(x + i, y, BAR_FILL, fill_style)
        else:
            canvas.set_cell(x + i, y, BAR_EMPTY, GRAY)
