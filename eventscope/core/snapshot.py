"""Immutable event snapshots and the caller-owned derived-model cache."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from eventscope.api.events import CursorHit, Event, HierarchyNode, Lane, TimeWindow
from eventscope.api.interaction import ResolveMode
from eventscope.core.aggregations import (
    HierarchyStats,
    WindowStats,
    compute_hierarchy_stats,
    compute_window_stats,
)
from eventscope.core.hierarchy import build_hierarchy
from eventscope.core.resolver import resolve
from eventscope.core.stacking import DEFAULT_OVERLAP_THRESHOLD_MS, build_lanes, clamp_threshold_ms
from eventscope.core.windows import DEFAULT_WINDOW_SIZE_S, partition_windows, window_size_ms

_LOG = logging.getLogger("eventscope.core")


@dataclass(frozen=True, eq=False)
class EventSnapshot:
    """Read-only event set; identity, not content, keys derived-model caches."""

    events: tuple[Event, ...]
    rejected: tuple[Event, ...] = ()

    @classmethod
    def from_events(cls, events: Iterable[Event]) -> "EventSnapshot":
        """Split events into timed members and rejected (untimed) records."""
        valid: list[Event] = []
        rejected: list[Event] = []
        for event in events:
            (valid if event.timestamp_ms is not None else rejected).append(event)
        if rejected:
            _LOG.warning("snapshot_rejected_untimed count=%d", len(rejected))
        return cls(events=tuple(valid), rejected=tuple(rejected))

    def __len__(self) -> int:
        return len(self.events)


@dataclass(frozen=True)
class TimelineModel:
    """Everything derived from one snapshot and one configuration."""

    trees: tuple[HierarchyNode, ...]
    windows: tuple[TimeWindow, ...]
    lanes: tuple[Lane, ...]
    hierarchy_stats: HierarchyStats
    window_stats: WindowStats
    window_size_s: float
    threshold_ms: float

    def query(
        self,
        cursor_ms: float,
        tolerance_ms: float,
        *,
        mode: ResolveMode = ResolveMode.NEAREST_PER_LANE,
    ) -> list[CursorHit]:
        return resolve(self.lanes, cursor_ms, tolerance_ms, mode=mode)


def build_timeline_model(
    snapshot: EventSnapshot,
    *,
    window_size_s: float = DEFAULT_WINDOW_SIZE_S,
    threshold_ms: float = DEFAULT_OVERLAP_THRESHOLD_MS,
) -> TimelineModel:
    trees = tuple(build_hierarchy(snapshot.events))
    windows = tuple(partition_windows(snapshot.events, window_size_s=window_size_s))
    lanes = tuple(build_lanes(snapshot.events, threshold_ms=threshold_ms))
    return TimelineModel(
        trees=trees,
        windows=windows,
        lanes=lanes,
        hierarchy_stats=compute_hierarchy_stats(trees),
        window_stats=compute_window_stats(windows, window_size_s=window_size_s),
        window_size_s=window_size_s,
        threshold_ms=threshold_ms,
    )


class TimelineModelCache:
    """Memoizes the model on ``(snapshot identity, window size ms, threshold ms)``."""

    def __init__(self) -> None:
        self._snapshot: EventSnapshot | None = None
        self._key: tuple[int, float] | None = None
        self._model: TimelineModel | None = None
        self.builds = 0

    def get(
        self,
        snapshot: EventSnapshot,
        *,
        window_size_s: float = DEFAULT_WINDOW_SIZE_S,
        threshold_ms: float = DEFAULT_OVERLAP_THRESHOLD_MS,
    ) -> TimelineModel:
        key = (window_size_ms(window_size_s), clamp_threshold_ms(threshold_ms))
        if self._model is not None and self._snapshot is snapshot and self._key == key:
            return self._model
        self._model = build_timeline_model(
            snapshot,
            window_size_s=window_size_s,
            threshold_ms=threshold_ms,
        )
        self._snapshot = snapshot
        self._key = key
        self.builds += 1
        _LOG.debug(
            "timeline_model_built events=%d windows=%d lanes=%d",
            len(snapshot),
            len(self._model.windows),
            len(self._model.lanes),
        )
        return self._model

    def invalidate(self) -> None:
        self._snapshot = None
        self._key = None
        self._model = None
