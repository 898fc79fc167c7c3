"""Telemetry snapshots consumed by the dashboard panels."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta


@dataclass(slots=True, frozen=True)
class SystemSnapshot:
    """Operating-system identity of the host."""

    os_name: str = ""
    hostname: str = ""
    uptime: timedelta = timedelta()
    cpu_model: str = ""


@dataclass(slots=True, frozen=True)
class MemorySnapshot:
    """Memory usage. Byte quantities are whole GiB."""

    total: int = 0
    used: int = 0
    free: int = 0
    cached: int = 0
    buffers: int = 0
    main_percent: float = 0.0
    swap_percent: float = 0.0

    @property
    def used_percent(self) -> float:
        """Used share of total, 0 when total is unknown."""
        if self.total <= 0:
            return 0.0
        return self.used / self.total * 100


@dataclass(slots=True, frozen=True)
class DiskSnapshot:
    """Aggregate over all partitions plus detail for the root mount."""

    total_gib: int = 0
    used_gib: int = 0
    percent: float = 0.0
    root_device: str = ""
    root_mount: str = ""
    root_free_gib: int = 0
    root_total_gib: int = 0
    root_used_gib: int = 0
    root_percent: float = 0.0


@dataclass(slots=True, frozen=True)
class CpuSnapshot:
    usage_percent: float = 0.0


@dataclass(slots=True, frozen=True)
class LoadSnapshot:
    load1: float = 0.0
    load5: float = 0.0
    load15: float = 0.0


@dataclass(slots=True, frozen=True)
class NetSnapshot:
    """Cumulative counters and the per-second rates since the last sample."""

    total_bytes_recv: int = 0
    total_bytes_sent: int = 0
    recent_bytes_recv_per_sec: int = 0
    recent_bytes_sent_per_sec: int = 0


@dataclass(slots=True, frozen=True)
class DockerSnapshot:
    """Container runtime status. ``recent_containers`` holds at most 3 labels."""

    running_count: int = 0
    stopped_count: int = 0
    total_images: int = 0
    recent_containers: tuple[str, ...] = field(default_factory=tuple)
