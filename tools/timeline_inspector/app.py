from __future__ import annotations

import logging
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import TextIO

from eventscope.api.events import CursorHit
from eventscope.api.interaction import ResolveMode
from eventscope.core.resolver import window_at
from eventscope.core.snapshot import EventSnapshot, TimelineModel
from eventscope.core.windows import axis_ticks, display_range
from eventscope.datasource.file_source import FileEventSource
from eventscope.diagnostics.json_codec import dumps_text
from eventscope.runtime.config import InspectorConfig
from eventscope.runtime.interaction import CursorInteractionMachine
from eventscope.runtime.projection import TimeScale
from tools.timeline_inspector.state import InspectorState
from tools.timeline_inspector.views.events import EventFilter, apply_event_filter
from tools.timeline_inspector.views.summary import build_summary_lines
from tools.timeline_inspector.views.tooltip import format_hits, hit_to_payload
from tools.timeline_inspector.views.tree import (
    event_to_payload,
    node_to_payload,
    render_node_lines,
    render_tree_lines,
    render_window_lines,
)

_LOG = logging.getLogger("tools.timeline_inspector")


@dataclass(frozen=True)
class CursorRequest:
    cursor_ms: float
    tolerance_ms: float
    mode: ResolveMode = ResolveMode.NEAREST_PER_LANE
    freeze: bool = False


def build_report(
    model: TimelineModel,
    state: InspectorState,
    *,
    cursor: CursorRequest | None = None,
) -> dict:
    """JSON-ready payload of statistics, windows with nested hierarchy, and lanes."""
    snapshot = state.snapshot
    time_range = display_range(snapshot.events, padding_ms=state.config.axis_padding_ms) if snapshot else None
    report = {
        "schema_version": "tool.timeline_inspector_report.v1",
        "hierarchy_stats": asdict(model.hierarchy_stats),
        "window_stats": asdict(model.window_stats),
        "windows": [
            {
                "window_id": window.window_id,
                "start_ms": window.start_ms,
                "end_ms": window.end_ms,
                "label": window.label,
                "total_items": window.total_items,
                "event_ids": [event.id for event in window.events],
                "events": [event_to_payload(event) for event in window.events],
                "hierarchy": [node_to_payload(node) for node in window.hierarchy],
            }
            for window in model.windows
        ],
        "trees": [node_to_payload(node) for node in model.trees],
        "lanes": [
            {
                "tab_id": lane.key,
                "events": len(lane.events),
                "max_stack_height": lane.max_stack_height,
            }
            for lane in model.lanes
        ],
        "axis": {
            "start_ms": time_range.start_ms if time_range else None,
            "end_ms": time_range.end_ms if time_range else None,
            "ticks": len(axis_ticks(time_range, tick_interval_ms=state.config.axis_tick_ms)),
        },
    }
    if cursor is not None:
        cursor_ms, hits = resolve_cursor(model, state, cursor)
        report["cursor"] = {
            "cursor_ms": cursor_ms,
            "tolerance_ms": cursor.tolerance_ms,
            "mode": cursor.mode.value,
            "frozen": cursor.freeze,
            "hits": [hit_to_payload(hit) for hit in hits],
        }
    return report


def resolve_cursor(
    model: TimelineModel,
    state: InspectorState,
    request: CursorRequest,
) -> tuple[float | None, list[CursorHit]]:
    """Cursor time and hits, either hovered directly or frozen through the machine."""
    if not request.freeze:
        return request.cursor_ms, model.query(request.cursor_ms, request.tolerance_ms, mode=request.mode)

    # Drive the interaction machine through hover then click.
    snapshot = state.snapshot
    time_range = display_range(snapshot.events, padding_ms=state.config.axis_padding_ms) if snapshot else None
    origin = time_range.start_ms if time_range is not None else request.cursor_ms
    scale = TimeScale(origin_ms=origin, pixels_per_second=state.config.pixels_per_second)
    machine = CursorInteractionMachine(
        lambda cursor, tolerance: model.query(cursor, tolerance, mode=request.mode),
        scale,
        hover_tolerance_ms=request.tolerance_ms,
        freeze_tolerance_ms=request.tolerance_ms,
    )
    machine.hover_at_time(request.cursor_ms)
    machine.click()
    return machine.cursor_time_ms(), machine.active_hits()


def cursor_lines(model: TimelineModel, state: InspectorState, request: CursorRequest) -> list[str]:
    cursor, hits = resolve_cursor(model, state, request)
    if cursor is None:
        return ["No cursor."]
    return format_hits(
        hits,
        cursor_ms=cursor,
        tolerance_ms=request.tolerance_ms,
        window=window_at(model.windows, cursor),
        frozen=request.freeze,
    )


def run_app(
    *,
    events_path: Path,
    config: InspectorConfig,
    cursor: CursorRequest | None = None,
    event_filter: EventFilter | None = None,
    node_id: str | None = None,
    as_json: bool = False,
    show_tree: bool = False,
    export_path: Path | None = None,
    out: TextIO | None = None,
) -> int:
    stream = out if out is not None else sys.stdout
    source = FileEventSource(events_path)
    try:
        snapshot = source.load_snapshot()
    except FileNotFoundError:
        _LOG.error("events_file_missing path=%s", events_path)
        return 2
    except ValueError:
        _LOG.error("events_file_unreadable path=%s", events_path, exc_info=True)
        return 2

    if event_filter is not None and event_filter.active:
        kept = apply_event_filter(snapshot.events, event_filter)
        _LOG.info("events_filtered kept=%d total=%d filter=%s", len(kept), len(snapshot), event_filter)
        snapshot = EventSnapshot(events=tuple(kept), rejected=snapshot.rejected)

    state = InspectorState(config=config, snapshot=snapshot, report=source.last_report())
    model = state.model()
    if model is None:
        return 1

    report = build_report(model, state, cursor=cursor)
    if export_path is not None:
        source.export_report(report, export_path)
        _LOG.info("report_exported path=%s", export_path)

    if as_json:
        stream.write(dumps_text(report, pretty=True) + "\n")
        return 0

    lines = build_summary_lines(snapshot=snapshot, model=model, report=state.report)
    if show_tree:
        lines.append("")
        lines.extend(render_tree_lines(model.trees))
    lines.append("")
    lines.extend(render_window_lines(model.windows, with_hierarchy=show_tree))
    if node_id is not None:
        lines.append("")
        lines.extend(render_node_lines(model.trees, node_id))
    if cursor is not None:
        lines.append("")
        lines.extend(cursor_lines(model, state, cursor))
    stream.write("\n".join(lines) + "\n")
    return 0
