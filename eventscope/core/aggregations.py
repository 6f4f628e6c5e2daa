"""Global hierarchy counts and per-window activity statistics."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from eventscope.api.events import ContainerType, Event, HierarchyNode, NodeKind, TimeWindow
from eventscope.core.hierarchy import iter_nodes
from eventscope.core.windows import DEFAULT_WINDOW_SIZE_S, format_clock, window_size_ms

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class HierarchyStats:
    tabs: int
    containers: int
    pages: int
    lefts: int
    orphaned_containers: int
    widgets: int
    actions: int
    total_nodes: int


@dataclass(frozen=True)
class WindowStats:
    total_windows: int
    total_items: int
    average_items_per_window: float
    busiest_window: str
    max_items_in_window: int
    time_span: str
    window_size: str


def round_half_up(value: float, digits: int = 1) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def compute_hierarchy_stats(trees: Iterable[HierarchyNode]) -> HierarchyStats:
    counts = {kind: 0 for kind in NodeKind}
    pages = lefts = orphaned = 0
    for node in iter_nodes(trees):
        counts[node.kind] += 1
        if node.kind is not NodeKind.CONTAINER:
            continue
        if node.container_type is ContainerType.LEFT:
            lefts += 1
        else:
            pages += 1
        if node.orphaned:
            orphaned += 1
    return HierarchyStats(
        tabs=counts[NodeKind.TAB],
        containers=counts[NodeKind.CONTAINER],
        pages=pages,
        lefts=lefts,
        orphaned_containers=orphaned,
        widgets=counts[NodeKind.WIDGET],
        actions=counts[NodeKind.ACTION],
        total_nodes=sum(counts.values()),
    )


def describe_window_size(window_size_s: float) -> str:
    """Human-readable applied window size, after millisecond clamping."""
    seconds = window_size_ms(window_size_s) / 1000.0
    text = f"{seconds:g}"
    return f"{text} second" if seconds == 1.0 else f"{text} seconds"


def compute_window_stats(
    windows: Sequence[TimeWindow],
    *,
    window_size_s: float = DEFAULT_WINDOW_SIZE_S,
) -> WindowStats:
    size_text = describe_window_size(window_size_s)
    if not windows:
        return WindowStats(
            total_windows=0,
            total_items=0,
            average_items_per_window=0.0,
            busiest_window=NOT_AVAILABLE,
            max_items_in_window=0,
            time_span=NOT_AVAILABLE,
            window_size=size_text,
        )
    total_items = sum(window.total_items for window in windows)
    busiest = windows[0]
    for window in windows[1:]:
        if window.total_items > busiest.total_items:
            busiest = window
    return WindowStats(
        total_windows=len(windows),
        total_items=total_items,
        average_items_per_window=round_half_up(total_items / len(windows)),
        busiest_window=busiest.label,
        max_items_in_window=busiest.total_items,
        time_span=f"{format_clock(windows[0].start_ms)} to {format_clock(windows[-1].end_ms)}",
        window_size=size_text,
    )


def items_per_tab(events: Iterable[Event]) -> dict[int, int]:
    """Timed event counts per tab id, ascending by tab id."""
    counts: dict[int, int] = {}
    for event in events:
        if event.timestamp_ms is None:
            continue
        counts[event.tab_id] = counts.get(event.tab_id, 0) + 1
    return dict(sorted(counts.items()))
