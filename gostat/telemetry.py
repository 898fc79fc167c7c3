"""Telemetry providers.

Each ``get_*`` function samples one area of the host and returns a snapshot,
raising ``ProviderError`` when the reading fails. ``collect`` wraps a
provider so a failure becomes a zero-valued snapshot for the current tick.
Docker is different: an unreachable daemon is a normal state, reported as
``None``.
"""

from __future__ import annotations

import logging
import platform
import socket
import subprocess
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Generic, TypeVar

import psutil

from gostat.models import (
    CpuSnapshot,
    DiskSnapshot,
    DockerSnapshot,
    LoadSnapshot,
    MemorySnapshot,
    NetSnapshot,
    SystemSnapshot,
)

logger = logging.getLogger(__name__)

GIB = 1024**3
RECENT_CONTAINERS = 3
DOCKER_TIMEOUT = 5.0

T = TypeVar("T")


class ProviderError(Exception):
    """A telemetry reading could not be taken."""


@dataclass(slots=True, frozen=True)
class ProviderResult(Generic[T]):
    """Outcome of one provider call: a snapshot or the error that replaced it."""

    value: T
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def collect(provider: Callable[[], T], fallback: T) -> ProviderResult[T]:
    """Run ``provider``; on failure return ``fallback`` alongside the error."""
    try:
        return ProviderResult(provider())
    except (ProviderError, psutil.Error, OSError) as e:
        logger.debug("%s failed: %s", getattr(provider, "__name__", provider), e)
        return ProviderResult(fallback, e)


# ── System identity ────────────────────────────────────────────────────────


def _os_name() -> str:
    try:
        release = platform.freedesktop_os_release()
    except OSError:
        return f"{platform.system()} {platform.release()}".strip()
    return f"{release.get('ID', platform.system().lower())} {release.get('VERSION_ID', '')}".strip()


def _cpu_model() -> str:
    """Model name of the first CPU, from /proc/cpuinfo where available."""
    try:
        with open("/proc/cpuinfo", encoding="utf-8") as f:
            for line in f:
                key, _, value = line.partition(":")
                if key.strip() == "model name":
                    return value.strip()
    except OSError:
        pass  # not Linux; fall through to platform
    return platform.processor()


def get_system_info() -> SystemSnapshot:
    try:
        uptime = max(0, int(time.time() - psutil.boot_time()))
    except (psutil.Error, OSError) as e:
        raise ProviderError(f"cannot read uptime: {e}") from e
    return SystemSnapshot(
        os_name=_os_name(),
        hostname=socket.gethostname(),
        uptime=timedelta(seconds=uptime),
        cpu_model=_cpu_model(),
    )


# ── Memory, disk, CPU, load ────────────────────────────────────────────────


def get_memory() -> MemorySnapshot:
    try:
        vm = psutil.virtual_memory()
        swap = psutil.swap_memory()
    except (psutil.Error, OSError) as e:
        raise ProviderError(f"cannot read memory info: {e}") from e
    return MemorySnapshot(
        total=vm.total // GIB,
        used=vm.used // GIB,
        free=vm.free // GIB,
        cached=getattr(vm, "cached", 0) // GIB,
        buffers=getattr(vm, "buffers", 0) // GIB,
        main_percent=vm.percent,
        swap_percent=swap.percent,
    )


def get_disk() -> DiskSnapshot:
    """Sum usage over all physical partitions; detail the root mount.

    Each partition is converted to whole GiB before summing. Bind mounts of
    the same device are not deduplicated.
    """
    try:
        partitions = psutil.disk_partitions(all=False)
    except (psutil.Error, OSError) as e:
        raise ProviderError(f"cannot list partitions: {e}") from e

    total = used = 0
    root = DiskSnapshot()
    for part in partitions:
        try:
            usage = psutil.disk_usage(part.mountpoint)
        except (psutil.Error, OSError) as e:
            raise ProviderError(f"cannot read usage of {part.mountpoint}: {e}") from e
        total += usage.total // GIB
        used += usage.used // GIB
        if part.mountpoint == "/":
            root = DiskSnapshot(
                root_device=part.device,
                root_mount=part.mountpoint,
                root_free_gib=usage.free // GIB,
                root_total_gib=usage.total // GIB,
                root_used_gib=usage.used // GIB,
                root_percent=usage.percent,
            )

    percent = used / total * 100 if total > 0 else 0.0
    return replace(root, total_gib=total, used_gib=used, percent=percent)


def get_cpu() -> CpuSnapshot:
    """Overall CPU usage since the previous call (non-blocking)."""
    try:
        return CpuSnapshot(usage_percent=psutil.cpu_percent(interval=None))
    except (psutil.Error, OSError) as e:
        raise ProviderError(f"cannot read CPU usage: {e}") from e


def get_load() -> LoadSnapshot:
    try:
        load1, load5, load15 = psutil.getloadavg()
    except (psutil.Error, OSError) as e:
        raise ProviderError(f"cannot read load average: {e}") from e
    return LoadSnapshot(load1=load1, load5=load5, load15=load15)


def warm_up() -> None:
    """Prime psutil's CPU delta so the first tick reports a real value."""
    psutil.cpu_percent(interval=None)


# ── Network ────────────────────────────────────────────────────────────────


class NetRateTracker:
    """Turns cumulative byte counters into per-second rates.

    The first sample has nothing to compare against and reports zero rates.
    A counter that goes backwards (interface reset, wrap) also reports zero.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._last_recv = 0
        self._last_sent = 0
        self._last_time: float | None = None

    def sample(self, recv: int, sent: int) -> NetSnapshot:
        with self._lock:
            now = self._clock()
            recv_rate = sent_rate = 0
            if self._last_time is not None:
                elapsed = now - self._last_time
                if elapsed > 0:
                    recv_rate = int(max(0, recv - self._last_recv) / elapsed)
                    sent_rate = int(max(0, sent - self._last_sent) / elapsed)
            self._last_recv = recv
            self._last_sent = sent
            self._last_time = now
        return NetSnapshot(
            total_bytes_recv=recv,
            total_bytes_sent=sent,
            recent_bytes_recv_per_sec=recv_rate,
            recent_bytes_sent_per_sec=sent_rate,
        )


net_tracker = NetRateTracker()


def get_network(tracker: NetRateTracker | None = None) -> NetSnapshot:
    """Aggregate counters over all interfaces, with rates since the last call."""
    try:
        counters = psutil.net_io_counters()
    except (psutil.Error, OSError) as e:
        raise ProviderError(f"cannot read network counters: {e}") from e
    if counters is None:
        raise ProviderError("no network interfaces")
    return (tracker or net_tracker).sample(counters.bytes_recv, counters.bytes_sent)


# ── Docker ─────────────────────────────────────────────────────────────────


def _docker(args: list[str], timeout: float) -> list[str] | None:
    """Run a docker CLI command; ``None`` when the daemon can't be reached."""
    try:
        result = subprocess.run(
            ["docker", *args],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("docker %s: %s", args[0], e)
        return None
    if result.returncode != 0:
        logger.debug("docker %s exited %d: %s", args[0], result.returncode, result.stderr.strip())
        return None
    return [line for line in result.stdout.splitlines() if line.strip()]


def get_docker(timeout: float = DOCKER_TIMEOUT) -> DockerSnapshot | None:
    """Container and image counts, or ``None`` if Docker is unavailable.

    ``docker ps -a`` lists the most recently created containers first.
    """
    containers = _docker(["ps", "-a", "--format", "{{.Names}}\t{{.State}}"], timeout)
    if containers is None:
        return None
    images = _docker(["images", "-q"], timeout)
    if images is None:
        return None

    running = stopped = 0
    recent: list[str] = []
    for line in containers:
        name, _, state = line.partition("\t")
        state = state.strip()
        if state == "running":
            running += 1
        else:
            stopped += 1
        if len(recent) < RECENT_CONTAINERS:
            recent.append(f"{name.strip()} ({state})")

    return DockerSnapshot(
        running_count=running,
        stopped_count=stopped,
        total_images=len(images),
        recent_containers=tuple(recent),
    )

