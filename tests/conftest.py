"""Shared fixtures: an in-memory screen that records frames and replays events."""

from __future__ import annotations

import logging
import queue
import threading

import pytest

from gostat.screen import DEFAULT_STYLE, CellBuffer, Event, ScreenError, Style


class FakeScreen:
    """Screen backed by a CellBuffer. Events are fed through ``push``."""

    def __init__(self, width: int = 80, height: int = 24) -> None:
        self.buffer = CellBuffer(width, height)
        self.events: queue.Queue[Event] = queue.Queue()
        self.initialized = False
        self.finalized = False
        self.fail_init = False
        self.shown = 0
        self.syncs = 0
        self.frame_shown = threading.Event()
        self.writes = 0

    def init(self) -> None:
        if self.fail_init:
            raise ScreenError("cannot initialize terminal: no tty")
        self.initialized = True

    def fini(self) -> None:
        self.finalized = True

    def size(self) -> tuple[int, int]:
        return self.buffer.width, self.buffer.height

    def clear(self) -> None:
        self.buffer.clear()

    def set_cell(self, x: int, y: int, glyph: str, style: Style = DEFAULT_STYLE) -> None:
        self.writes += 1
        self.buffer.set_cell(x, y, glyph, style)

    def show(self) -> None:
        self.shown += 1
        self.frame_shown.set()

    def sync(self) -> None:
        self.syncs += 1

    def poll_event(self) -> Event:
        return self.events.get(timeout=5.0)

    def push(self, event: Event) -> None:
        self.events.put(event)

    # helpers for assertions
    def row(self, y: int) -> str:
        return self.buffer.row_text(y)

    def text(self) -> str:
        return "\n".join(self.row(y) for y in range(self.buffer.height))


@pytest.fixture
def screen() -> FakeScreen:
    return FakeScreen()


@pytest.fixture(autouse=True)
def reset_gostat_logger():
    """configure_logging binds stderr once; give every test a fresh logger."""
    yield
    log = logging.getLogger("gostat")
    for handler in list(log.handlers):
        log.removeHandler(handler)
    log.propagate = True
    log.setLevel(logging.NOTSET)
