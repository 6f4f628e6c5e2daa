"""View helpers for cursor tooltips."""

from __future__ import annotations

from collections.abc import Sequence

from eventscope.api.events import CursorHit, TimeWindow
from eventscope.core.hierarchy import hierarchy_path
from eventscope.core.windows import format_precise


def hit_to_row(hit: CursorHit) -> tuple[str, str, str, str, str]:
    event = hit.event
    stamp = format_precise(event.timestamp_ms) if event.timestamp_ms is not None else "n/a"
    return (
        stamp,
        f"tab {hit.lane_key}",
        event.scope.value,
        hierarchy_path(event),
        f"{hit.distance_ms:.0f}ms",
    )


def format_hits(
    hits: Sequence[CursorHit],
    *,
    cursor_ms: float,
    tolerance_ms: float,
    window: TimeWindow | None = None,
    frozen: bool = False,
) -> list[str]:
    lines = [f"cursor={format_precise(cursor_ms)}"]
    if window is not None:
        lines.append(f"window={window.label} ({window.total_items} items)")
    if not hits:
        lines.append(f"No events within ±{tolerance_ms:g}ms")
    for hit in hits:
        lines.append(" | ".join(hit_to_row(hit)))
    lines.append("Frozen: click to unfreeze" if frozen else "Click to freeze")
    return lines


def hit_to_payload(hit: CursorHit) -> dict:
    event = hit.event
    return {
        "id": event.id,
        "tab_id": event.tab_id,
        "user_id": event.user_id,
        "scope": event.scope.value,
        "parent_id": event.parent_id,
        "label": event.label,
        "action": event.action,
        "timestamp_ms": event.timestamp_ms,
        "distance_ms": hit.distance_ms,
        "stack_level": hit.stack_level,
    }
