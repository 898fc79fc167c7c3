"""Panel renderers: turn one tick's snapshots into cell writes.

Each ``draw_*`` renderer draws into the content rectangle it is given and
does nothing when that rectangle is empty. ``draw_scene`` composes the
whole frame: outer border, title and the six titled panels.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from gostat.draw import (
    BORDER_STYLE,
    Canvas,
    Region,
    draw_aligned_block,
    draw_bar,
    draw_border,
    draw_box,
    draw_centered_block,
    draw_centered_text,
    draw_text,
    truncate,
)
from gostat.layout import (
    CPU_LOAD,
    DISK_USAGE,
    DOCKER_INFO,
    MEMORY_USAGE,
    NETWORK_TRAFFIC,
    SYSTEM_INFO,
    TITLE_ROW,
    Layout,
    Rect,
)
from gostat.models import (
    CpuSnapshot,
    DiskSnapshot,
    DockerSnapshot,
    LoadSnapshot,
    MemorySnapshot,
    NetSnapshot,
    SystemSnapshot,
)
from gostat.screen import Color, Style

TITLE = "GoStat - System Monitor"
TITLE_STYLE = Style(Color.GREEN, bold=True)
WHITE = Style(Color.WHITE)
YELLOW = Style(Color.YELLOW)
RED = Style(Color.RED)
ORANGE = Style(Color.ORANGE)
GREEN = Style(Color.GREEN)
DARK_CYAN = Style(Color.DARK_CYAN)
DEFAULT = Style()

MIB = 1024 * 1024
NET_SCALE = 1024 * MIB  # bars are full at 1 GiB
DOCKER_UNAVAILABLE = "Docker is not installed or not running."


@dataclass(slots=True, frozen=True)
class Frame:
    """Everything one tick sampled. ``docker`` is None when Docker is unavailable."""

    system: SystemSnapshot = field(default_factory=SystemSnapshot)
    memory: MemorySnapshot = field(default_factory=MemorySnapshot)
    docker: DockerSnapshot | None = None
    cpu: CpuSnapshot = field(default_factory=CpuSnapshot)
    load: LoadSnapshot = field(default_factory=LoadSnapshot)
    disk: DiskSnapshot = field(default_factory=DiskSnapshot)
    net: NetSnapshot = field(default_factory=NetSnapshot)


def format_uptime(uptime: timedelta) -> str:
    """Compact hours-minutes-seconds form: ``26h3m4s``, ``3m4s``, ``4s``."""
    total = max(0, int(uptime.total_seconds()))
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{minutes}m{seconds}s"
    return f"{seconds}s"


def _center_y(rect: Rect) -> int:
    # Two rows above the midpoint, leaving room for the block below it.
    return rect.y + rect.height // 2 - 2


# ── Left column ────────────────────────────────────────────────────────────


def draw_system_info(canvas: Canvas, rect: Rect, info: SystemSnapshot) -> None:
    if rect.is_empty:
        return
    lines = [
        f"OS Version: {info.os_name}",
        f"HostName: {info.hostname}",
        f"Uptime: {format_uptime(info.uptime)}",
        f"CPU Info: {info.cpu_model}",
    ]
    draw_centered_block(canvas, rect, lines)


def draw_memory(canvas: Canvas, rect: Rect, mem: MemorySnapshot) -> None:
    if rect.is_empty:
        return
    cy = _center_y(rect)
    used_percent = mem.used_percent

    draw_bar(canvas, rect.x, cy, rect.width, 100, 100, Color.GREEN)
    draw_centered_text(canvas, rect.x, cy + 1, rect.width, f"Total: {mem.total}G", WHITE)

    draw_bar(canvas, rect.x, cy + 3, rect.width, used_percent, 100, Color.ORANGE)
    label = f"Used: {mem.used}G ({used_percent:.2f}%)"
    draw_centered_text(canvas, rect.x, cy + 4, rect.width, label, ORANGE)


def draw_docker(canvas: Canvas, rect: Rect, docker: DockerSnapshot | None) -> None:
    """Counts on the left, the most recent containers on the right."""
    if rect.is_empty:
        return
    if docker is None:
        draw_centered_text(canvas, rect.x, rect.y, rect.width, DOCKER_UNAVAILABLE, RED)
        return

    col_width = rect.width // 2
    counts = [
        f"Running Containers: {docker.running_count}",
        f"Stopped Containers: {docker.stopped_count}",
        f"Total Images: {docker.total_images}",
    ]
    draw_aligned_block(canvas, Rect(rect.x, rect.y, col_width, rect.height), counts, DEFAULT)

    right_x = rect.x + col_width
    draw_text(canvas, right_x, rect.y, col_width, "Recent Containers:", YELLOW)
    shown = docker.recent_containers[: min(3, rect.height - 1)]
    for i, label in enumerate(shown):
        line = truncate(f"- {label}", col_width)
        draw_text(canvas, right_x, rect.y + 1 + i, col_width, line, DARK_CYAN)


# ── Right column ───────────────────────────────────────────────────────────


def draw_cpu_load(canvas: Canvas, rect: Rect, cpu: CpuSnapshot, load: LoadSnapshot) -> None:
    if rect.is_empty:
        return
    cy = _center_y(rect)
    draw_bar(canvas, rect.x, cy, rect.width, cpu.usage_percent, 100, Color.RED)
    draw_centered_text(canvas, rect.x, cy + 2, rect.width, f"CPU Usage: {cpu.usage_percent:.2f}%", WHITE)
    draw_centered_text(canvas, rect.x, cy + 4, rect.width, "Load Average:", YELLOW)
    details = f"1min: {load.load1:.2f}  5min: {load.load5:.2f}  15min: {load.load15:.2f}"
    draw_centered_text(canvas, rect.x, cy + 5, rect.width, details, YELLOW)


def draw_disk(canvas: Canvas, rect: Rect, disk: DiskSnapshot) -> None:
    if rect.is_empty:
        return
    lines = [
        f"Total: {disk.total_gib}G Used: {disk.used_gib}G Total Usage: {disk.percent:.2f}%",
        "=" * rect.width,
        "Disk       Mounted    Free    Used",
        f"{disk.root_device}     {disk.root_mount}       {disk.root_free_gib}G     {disk.root_percent:.2f}%",
    ]
    draw_centered_block(canvas, rect, lines)


def draw_network(canvas: Canvas, rect: Rect, net: NetSnapshot) -> None:
    """Cumulative traffic against a fixed 1 GiB scale."""
    if rect.is_empty:
        return
    cy = _center_y(rect)

    draw_bar(canvas, rect.x, cy, rect.width, net.total_bytes_recv, NET_SCALE, Color.GREEN)
    recv = f"Recv: {net.total_bytes_recv / MIB:.2f} MB"
    draw_centered_text(canvas, rect.x, cy + 1, rect.width, recv, GREEN)

    draw_bar(canvas, rect.x, cy + 3, rect.width, net.total_bytes_sent, NET_SCALE, Color.RED)
    sent = f"Sent: {net.total_bytes_sent / MIB:.2f} MB"
    draw_centered_text(canvas, rect.x, cy + 4, rect.width, sent, RED)


# ── Scene ──────────────────────────────────────────────────────────────────


def draw_title(canvas: Canvas, width: int) -> None:
    draw_centered_text(canvas, 0, TITLE_ROW, width, TITLE, TITLE_STYLE)


def draw_scene(canvas: Canvas, layout: Layout, frame: Frame) -> None:
    """Draw a complete frame. A panel too small for content keeps only its box."""
    outer = layout.outer
    if outer.is_empty:
        return
    draw_border(canvas, outer.x, outer.y, outer.right, outer.bottom, BORDER_STYLE)
    draw_title(canvas, outer.width)

    renderers = {
        SYSTEM_INFO: lambda c, r: draw_system_info(c, r, frame.system),
        MEMORY_USAGE: lambda c, r: draw_memory(c, r, frame.memory),
        DOCKER_INFO: lambda c, r: draw_docker(c, r, frame.docker),
        CPU_LOAD: lambda c, r: draw_cpu_load(c, r, frame.cpu, frame.load),
        DISK_USAGE: lambda c, r: draw_disk(c, r, frame.disk),
        NETWORK_TRAFFIC: lambda c, r: draw_network(c, r, frame.net),
    }
    for panel in layout.panels:
        if panel.box.is_empty:
            continue
        region = Region(canvas, panel.box)
        draw_box(region, panel.box, panel.title)
        if panel.inner.is_empty:
            continue
        renderers[panel.title](region, panel.inner)
