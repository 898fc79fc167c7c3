"""gostat: full-screen, auto-refreshing host telemetry dashboard.

A background ``Refresher`` thread samples every telemetry provider once per
interval and redraws the whole screen; the main thread blocks on terminal
input, re-syncing on resize and shutting down on Esc or Ctrl-C.

Usage:
    gostat
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable
from functools import partial

from gostat import telemetry
from gostat.config import load_config
from gostat.layout import compute_layout
from gostat.logging_setup import configure_logging, flush_logging
from gostat.models import (
    CpuSnapshot,
    DiskSnapshot,
    LoadSnapshot,
    MemorySnapshot,
    NetSnapshot,
    SystemSnapshot,
)
from gostat.panels import Frame, draw_scene
from gostat.screen import (
    KEY_CTRL_C,
    KEY_ESCAPE,
    CursesScreen,
    KeyEvent,
    ResizeEvent,
    Screen,
    ScreenError,
)

logger = logging.getLogger(__name__)

UPDATE_INTERVAL = 1.0
EXIT_KEYS = (KEY_ESCAPE, KEY_CTRL_C)

# ── Sampling ───────────────────────────────────────────────────────────────


def sample_frame(docker_timeout: float = telemetry.DOCKER_TIMEOUT) -> Frame:
    """Query every provider once. Failed providers contribute zeros."""
    docker = telemetry.collect(partial(telemetry.get_docker, docker_timeout), None)
    return Frame(
        system=telemetry.collect(telemetry.get_system_info, SystemSnapshot()).value,
        memory=telemetry.collect(telemetry.get_memory, MemorySnapshot()).value,
        docker=docker.value,
        cpu=telemetry.collect(telemetry.get_cpu, CpuSnapshot()).value,
        load=telemetry.collect(telemetry.get_load, LoadSnapshot()).value,
        disk=telemetry.collect(telemetry.get_disk, DiskSnapshot()).value,
        net=telemetry.collect(telemetry.get_network, NetSnapshot()).value,
    )


# ── Refresh loop ───────────────────────────────────────────────────────────


class Refresher:
    """
    Redraws the dashboard on a daemon thread until told to stop.

    The stop signal is checked between ticks, so a tick in progress always
    completes. ``stop()`` does not wait for the thread; the screen drops any
    frame presented after teardown.
    """

    def __init__(
        self,
        screen: Screen,
        sampler: Callable[[], Frame] = sample_frame,
        interval: float = UPDATE_INTERVAL,
    ) -> None:
        self._screen = screen
        self._sampler = sampler
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self.ticks = 0

    @property
    def stopping(self) -> bool:
        return self._stop_event.is_set()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, daemon=True, name="Refresher")
        self._thread.start()

    def stop(self) -> None:
        """Raise the shutdown signal."""
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    def tick(self) -> None:
        """Sample, compose and present one frame."""
        frame = self._sampler()
        self._screen.clear()
        width, height = self._screen.size()
        draw_scene(self._screen, compute_layout(width, height), frame)
        self._screen.show()
        self.ticks += 1

    def _loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.tick()
            except Exception:
                logger.exception("refresh tick failed")
            self._stop_event.wait(timeout=self._interval)


# ── Event loop ─────────────────────────────────────────────────────────────


def run_event_loop(screen: Screen, refresher: Refresher) -> None:
    """Handle input until Esc or Ctrl-C, then signal the refresher to stop."""
    while True:
        event = screen.poll_event()
        if isinstance(event, ResizeEvent):
            logger.debug("terminal resized to %dx%d", event.width, event.height)
            screen.sync()
        elif isinstance(event, KeyEvent) and event.key in EXIT_KEYS:
            refresher.stop()
            return


# ── CLI entry point ────────────────────────────────────────────────────────


def run(screen: Screen | None = None) -> int:
    """Run the dashboard and return the process exit code."""
    log = configure_logging()
    config = load_config()
    log.setLevel(config["log_level"])

    screen = screen or CursesScreen()
    try:
        screen.init()
    except ScreenError as e:
        flush_logging()
        print(f"gostat: {e}", file=sys.stderr)
        return 1

    telemetry.warm_up()
    refresher = Refresher(
        screen,
        partial(sample_frame, config["docker_timeout"]),
        config["update_interval"],
    )
    try:
        refresher.start()
        run_event_loop(screen, refresher)
    except KeyboardInterrupt:
        pass
    finally:
        refresher.stop()
        screen.fini()
        flush_logging()
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
