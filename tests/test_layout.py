"""Tests for gostat.layout."""

from __future__ import annotations

import pytest

from gostat.layout import (
    CPU_LOAD,
    DISK_USAGE,
    DOCKER_INFO,
    MEMORY_USAGE,
    NETWORK_TRAFFIC,
    SYSTEM_INFO,
    Rect,
    compute_layout,
)

# ── 80x24 reference layout ─────────────────────────────────────────────────


def test_layout_80x24_boxes() -> None:
    layout = compute_layout(80, 24)
    boxes = {p.title: p.box for p in layout.panels}
    assert boxes[SYSTEM_INFO] == Rect(1, 2, 38, 8)
    assert boxes[MEMORY_USAGE] == Rect(1, 10, 38, 7)
    assert boxes[DOCKER_INFO] == Rect(1, 17, 38, 6)
    assert boxes[CPU_LOAD] == Rect(39, 2, 40, 8)
    assert boxes[DISK_USAGE] == Rect(39, 10, 40, 7)
    assert boxes[NETWORK_TRAFFIC] == Rect(39, 17, 40, 6)


def test_layout_80x24_inner() -> None:
    layout = compute_layout(80, 24)
    assert layout.panel(SYSTEM_INFO).inner == Rect(2, 3, 36, 6)
    assert layout.panel(MEMORY_USAGE).inner == Rect(2, 11, 36, 5)
    assert layout.panel(DOCKER_INFO).inner == Rect(2, 18, 36, 4)
    assert layout.panel(CPU_LOAD).inner == Rect(40, 3, 38, 6)
    assert layout.panel(DISK_USAGE).inner == Rect(40, 11, 38, 5)
    assert layout.panel(NETWORK_TRAFFIC).inner == Rect(40, 18, 38, 4)


def test_layout_outer_border() -> None:
    layout = compute_layout(80, 24)
    assert layout.outer == Rect(0, 0, 80, 24)
    assert (layout.outer.right, layout.outer.bottom) == (79, 23)


def test_panel_order() -> None:
    titles = [p.title for p in compute_layout(80, 24).panels]
    assert titles == [SYSTEM_INFO, MEMORY_USAGE, DOCKER_INFO, CPU_LOAD, DISK_USAGE, NETWORK_TRAFFIC]


def test_unknown_panel_raises() -> None:
    with pytest.raises(KeyError):
        compute_layout(80, 24).panel("GPU")


# ── Geometry properties ────────────────────────────────────────────────────


def _cells(rect: Rect) -> set[tuple[int, int]]:
    return {(x, y) for x in range(rect.x, rect.x + rect.width) for y in range(rect.y, rect.y + rect.height)}


@pytest.mark.parametrize("width", [20, 21, 33, 64, 80, 81, 132, 211])
@pytest.mark.parametrize("height", [12, 13, 14, 24, 25, 40, 57])
def test_panels_fit_and_do_not_overlap(width: int, height: int) -> None:
    layout = compute_layout(width, height)
    boxes = [p.box for p in layout.panels]
    for box in boxes:
        assert box.x >= 0 and box.y >= 0
        assert box.x + box.width <= width
        assert box.y + box.height <= height
    for i, a in enumerate(boxes):
        for b in boxes[i + 1 :]:
            assert not (_cells(a) & _cells(b)), (a, b)


@pytest.mark.parametrize(("width", "height"), [(80, 24), (20, 12), (120, 40)])
def test_inner_inside_box(width: int, height: int) -> None:
    for panel in compute_layout(width, height).panels:
        if panel.inner.is_empty:
            continue
        assert _cells(panel.inner) <= _cells(panel.box)


def test_tiny_screen_produces_empty_rects() -> None:
    layout = compute_layout(10, 6)
    assert any(p.box.is_empty or p.inner.is_empty for p in layout.panels)


def test_rect_contains() -> None:
    r = Rect(2, 3, 4, 2)
    assert r.contains(2, 3)
    assert r.contains(5, 4)
    assert not r.contains(6, 4)
    assert not r.contains(2, 5)
    assert not Rect(0, 0, 0, 5).contains(0, 0)
