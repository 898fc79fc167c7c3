"""Screen geometry: two columns of three titled panels inside an outer border."""

from __future__ import annotations

from dataclasses import dataclass

SYSTEM_INFO = "System Info"
MEMORY_USAGE = "Memory Usage"
DOCKER_INFO = "Docker Info"
CPU_LOAD = "CPU & Load"
DISK_USAGE = "Disk Usage"
NETWORK_TRAFFIC = "Network Traffic"

TITLE_ROW = 1


@dataclass(slots=True, frozen=True)
class Rect:
    """Rectangle in character cells."""

    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def right(self) -> int:
        """Last column inside the rectangle."""
        return self.x + self.width - 1

    @property
    def bottom(self) -> int:
        """Last row inside the rectangle."""
        return self.y + self.height - 1

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


@dataclass(slots=True, frozen=True)
class Panel:
    """A titled box and the content area its renderer draws into."""

    title: str
    box: Rect
    inner: Rect


@dataclass(slots=True, frozen=True)
class Layout:
    outer: Rect
    panels: tuple[Panel, ...]

    def panel(self, title: str) -> Panel:
        for p in self.panels:
            if p.title == title:
                return p
        raise KeyError(title)


def _column(titles: tuple[str, str, str], x: int, width: int, height: int) -> list[Panel]:
    """Stack three panels in a column whose boxes start at ``x``."""
    third = height // 3
    two_thirds = 2 * height // 3
    top, middle, bottom = titles
    return [
        Panel(
            top,
            Rect(x, 2, width, third),
            Rect(x + 1, 3, width - 2, third - 2),
        ),
        Panel(
            middle,
            Rect(x, third + 2, width, third - 1),
            Rect(x + 1, third + 3, width - 2, third - 3),
        ),
        Panel(
            bottom,
            Rect(x, two_thirds + 1, width, third - 2),
            Rect(x + 1, two_thirds + 2, width - 2, third - 4),
        ),
    ]


def compute_layout(width: int, height: int) -> Layout:
    """Compute the outer border and the six panel rectangles for a screen size.

    The left column's boxes start at x=1 and the right column's at
    ``width // 2 - 1``. Small screens can produce empty rectangles, which the
    renderers skip.
    """
    left_w = width // 2
    right_x = left_w - 1
    left = _column((SYSTEM_INFO, MEMORY_USAGE, DOCKER_INFO), 1, left_w - 2, height)
    right = _column((CPU_LOAD, DISK_USAGE, NETWORK_TRAFFIC), right_x, width - right_x - 1, height)
    return Layout(outer=Rect(0, 0, width, height), panels=tuple(left + right))
