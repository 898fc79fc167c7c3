"""Terminal screen built on curses.

Frames are composed in an off-screen ``CellBuffer`` and copied to the
terminal in one go by ``CursesScreen.show()``. One lock serializes every
curses call, so the refresh thread and the input loop can share the terminal.
The back buffer is written only by the drawing thread and has its own lock
for the size it adopts on resize.
"""

from __future__ import annotations

import curses
import locale
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)

# ── Styles ─────────────────────────────────────────────────────────────────


class Color(Enum):
    DEFAULT = "default"
    WHITE = "white"
    GREEN = "green"
    ORANGE = "orange"
    RED = "red"
    YELLOW = "yellow"
    DARK_CYAN = "dark-cyan"
    GRAY = "gray"
    LIGHT_CORAL = "light-coral"


@dataclass(slots=True, frozen=True)
class Style:
    fg: Color = Color.DEFAULT
    bold: bool = False


DEFAULT_STYLE = Style()

# (256-colour index, 8-colour fallback)
_PALETTE: dict[Color, tuple[int, int]] = {
    Color.WHITE: (15, curses.COLOR_WHITE),
    Color.GREEN: (2, curses.COLOR_GREEN),
    Color.ORANGE: (208, curses.COLOR_YELLOW),
    Color.RED: (1, curses.COLOR_RED),
    Color.YELLOW: (3, curses.COLOR_YELLOW),
    Color.DARK_CYAN: (6, curses.COLOR_CYAN),
    Color.GRAY: (244, curses.COLOR_WHITE),
    Color.LIGHT_CORAL: (210, curses.COLOR_RED),
}

# ── Events ─────────────────────────────────────────────────────────────────

KEY_ESCAPE = 27
KEY_CTRL_C = 3


@dataclass(slots=True, frozen=True)
class ResizeEvent:
    width: int
    height: int


@dataclass(slots=True, frozen=True)
class KeyEvent:
    key: int


Event = ResizeEvent | KeyEvent


class ScreenError(Exception):
    """The terminal could not be initialized."""


class Screen(Protocol):
    """What the dashboard needs from a terminal."""

    def init(self) -> None: ...
    def fini(self) -> None: ...
    def size(self) -> tuple[int, int]: ...
    def clear(self) -> None: ...
    def set_cell(self, x: int, y: int, glyph: str, style: Style = ...) -> None: ...
    def show(self) -> None: ...
    def sync(self) -> None: ...
    def poll_event(self) -> Event: ...


# ── Cell buffer ────────────────────────────────────────────────────────────

BLANK = (" ", DEFAULT_STYLE)


class CellBuffer:
    """Fixed-size grid of (glyph, style) cells. Writes outside it are dropped."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self.width = 0
        self.height = 0
        self._rows: list[list[tuple[str, Style]]] = []
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.clear()

    def clear(self) -> None:
        self._rows = [[BLANK] * self.width for _ in range(self.height)]

    def set_cell(self, x: int, y: int, glyph: str, style: Style = DEFAULT_STYLE) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self._rows[y][x] = (glyph, style)

    def get_cell(self, x: int, y: int) -> tuple[str, Style]:
        return self._rows[y][x]

    def row_text(self, y: int) -> str:
        return "".join(glyph for glyph, _ in self._rows[y])

    def rows(self) -> list[list[tuple[str, Style]]]:
        return self._rows


# ── Curses screen ──────────────────────────────────────────────────────────


class CursesScreen:
    """Full-screen terminal backed by curses."""

    def __init__(self, poll_timeout_ms: int = 100) -> None:
        self._lock = threading.RLock()
        self._buffer_lock = threading.Lock()
        self._poll_timeout_ms = poll_timeout_ms
        self._stdscr: curses.window | None = None
        self._buffer = CellBuffer()
        self._front: list[list[tuple[str, Style]]] = []
        self._terminal_size: tuple[int, int] | None = None
        self._pairs: dict[Style, int] = {}
        self._colors: dict[Color, int] = {}

    def init(self) -> None:
        """Take over the terminal. Raises ``ScreenError`` on failure."""
        with self._lock:
            try:
                locale.setlocale(locale.LC_ALL, "")
            except locale.Error as e:
                logger.warning("keeping default locale: %s", e)
            try:
                stdscr = curses.initscr()
                curses.noecho()
                curses.raw()
                stdscr.keypad(True)
                stdscr.timeout(self._poll_timeout_ms)
                try:
                    curses.curs_set(0)
                except curses.error:
                    pass  # cursor visibility is unsupported on some terminals
                curses.set_escdelay(25)
                self._init_colors()
            except curses.error as e:
                self._restore_terminal()
                raise ScreenError(f"cannot initialize terminal: {e}") from e
            self._stdscr = stdscr
            height, width = stdscr.getmaxyx()
            self._buffer.resize(width, height)
            logger.debug("screen initialized at %dx%d", width, height)

    def _init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        curses.use_default_colors()
        rich = curses.COLORS >= 256
        for color, (extended, basic) in _PALETTE.items():
            self._colors[color] = extended if rich else basic

    def _restore_terminal(self) -> None:
        try:
            curses.endwin()
        except curses.error:
            pass  # endwin fails when initscr never completed

    def fini(self) -> None:
        """Give the terminal back. Safe to call more than once."""
        with self._lock:
            if self._stdscr is None:
                return
            self._stdscr.keypad(False)
            curses.noraw()
            curses.echo()
            self._restore_terminal()
            self._stdscr = None
            logger.debug("screen torn down")

    def size(self) -> tuple[int, int]:
        with self._buffer_lock:
            if self._terminal_size is not None:
                return self._terminal_size
            return self._buffer.width, self._buffer.height

    def clear(self) -> None:
        """Start a new frame, adopting the terminal size if it changed."""
        with self._buffer_lock:
            if self._terminal_size is not None:
                self._buffer.resize(*self._terminal_size)
                self._terminal_size = None
            else:
                self._buffer.clear()

    def set_cell(self, x: int, y: int, glyph: str, style: Style = DEFAULT_STYLE) -> None:
        # Only the drawing thread writes cells; the buffer is resized in clear()
        # on that same thread.
        self._buffer.set_cell(x, y, glyph, style)

    def _attr(self, style: Style) -> int:
        attr = curses.A_BOLD if style.bold else curses.A_NORMAL
        if style.fg is Color.DEFAULT or style.fg not in self._colors:
            return attr
        pair = self._pairs.get(style)
        if pair is None:
            pair = len(self._pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                return attr
            curses.init_pair(pair, self._colors[style.fg], -1)
            self._pairs[style] = pair
        return attr | curses.color_pair(pair)

    def show(self) -> None:
        """Present the composed frame."""
        with self._buffer_lock:
            front = [list(row) for row in self._buffer.rows()]
        with self._lock:
            if self._stdscr is None:
                return
            self._front = front
            self._paint()

    def _paint(self) -> None:
        assert self._stdscr is not None
        stdscr = self._stdscr
        stdscr.erase()
        for y, row in enumerate(self._front):
            for x, (glyph, style) in enumerate(row):
                if glyph == " " and style == DEFAULT_STYLE:
                    continue
                try:
                    stdscr.addstr(y, x, glyph, self._attr(style))
                except curses.error:
                    pass  # cells beyond a shrunken terminal, or the bottom-right corner
        stdscr.refresh()

    def sync(self) -> None:
        """Repaint the last presented frame from scratch."""
        with self._lock:
            if self._stdscr is None:
                return
            self._fit_to_terminal()
            self._stdscr.clearok(True)
            self._paint()

    def _fit_to_terminal(self) -> None:
        # The back buffer may hold a frame in progress; it adopts the new size
        # at the next clear().
        assert self._stdscr is not None
        height, width = self._stdscr.getmaxyx()
        with self._buffer_lock:
            if (width, height) != (self._buffer.width, self._buffer.height):
                self._terminal_size = (width, height)
            else:
                self._terminal_size = None

    def poll_event(self) -> Event:
        """Block until the next key press or resize."""
        while True:
            with self._lock:
                if self._stdscr is None:
                    raise ScreenError("screen is not initialized")
                key = self._stdscr.getch()
                if key == curses.KEY_RESIZE:
                    curses.update_lines_cols()
                    self._fit_to_terminal()
                    width, height = self.size()
                    return ResizeEvent(width, height)
            if key != -1:
                return KeyEvent(key)
