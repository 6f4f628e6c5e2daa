"""View helpers for snapshot summary."""

from __future__ import annotations

from eventscope.core.aggregations import items_per_tab
from eventscope.core.snapshot import EventSnapshot, TimelineModel
from eventscope.datasource.base import LoadReport


def build_summary_lines(
    *,
    snapshot: EventSnapshot | None,
    model: TimelineModel | None,
    report: LoadReport | None = None,
) -> list[str]:
    if snapshot is None or model is None:
        return ["No snapshot loaded."]

    tree = model.hierarchy_stats
    windows = model.window_stats
    lines = [
        f"source={report.source if report is not None else 'n/a'}",
        f"events={len(snapshot.events)}",
        f"untimed={len(snapshot.rejected)}",
        f"skipped_records={report.skipped if report is not None else 0}",
        f"tabs={tree.tabs}",
        f"containers={tree.containers} (pages={tree.pages} lefts={tree.lefts} orphaned={tree.orphaned_containers})",
        f"widgets={tree.widgets}",
        f"actions={tree.actions}",
        f"total_nodes={tree.total_nodes}",
        f"window_size={windows.window_size}",
        f"time_span={windows.time_span}",
        f"total_windows={windows.total_windows}",
        f"total_items={windows.total_items}",
        f"avg_items_per_window={windows.average_items_per_window}",
        f"busiest_window={windows.busiest_window}",
        f"max_items_in_window={windows.max_items_in_window}",
    ]
    for tab_id, count in items_per_tab(snapshot.events).items():
        lane = next((lane for lane in model.lanes if lane.key == tab_id), None)
        height = lane.max_stack_height if lane is not None else 1
        lines.append(f"lane tab={tab_id} events={count} max_stack_height={height}")
    return lines
