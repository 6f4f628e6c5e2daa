"""Pure derivations over immutable event snapshots."""

from eventscope.core.aggregations import (
    HierarchyStats,
    WindowStats,
    compute_hierarchy_stats,
    compute_window_stats,
)
from eventscope.core.hierarchy import build_hierarchy
from eventscope.core.resolver import events_within_tolerance, nearest_per_lane, resolve
from eventscope.core.snapshot import (
    EventSnapshot,
    TimelineModel,
    TimelineModelCache,
    build_timeline_model,
)
from eventscope.core.stacking import build_lanes, stack_levels, stack_levels_naive
from eventscope.core.windows import partition_windows, window_start

__all__ = [
    "EventSnapshot",
    "HierarchyStats",
    "TimelineModel",
    "TimelineModelCache",
    "WindowStats",
    "build_hierarchy",
    "build_lanes",
    "build_timeline_model",
    "compute_hierarchy_stats",
    "compute_window_stats",
    "events_within_tolerance",
    "nearest_per_lane",
    "partition_windows",
    "resolve",
    "stack_levels",
    "stack_levels_naive",
    "window_start",
]
