"""Vertical stacking layout for temporally-close events sharing a lane."""

from __future__ import annotations

import logging
import math
from collections import deque
from collections.abc import Iterable, Sequence

from eventscope.api.events import Event, Lane
from eventscope.core.hierarchy import event_sort_key

_LOG = logging.getLogger("eventscope.core")

DEFAULT_OVERLAP_THRESHOLD_MS = 2_000


def stack_levels_naive(timestamps: Sequence[float], threshold_ms: float) -> list[int]:
    """Reference O(n^2) assignment: one level above every overlapping predecessor."""
    levels: list[int] = []
    for i, current in enumerate(timestamps):
        level = 0
        for j in range(i):
            if abs(current - timestamps[j]) < threshold_ms:
                level = max(level, levels[j] + 1)
        levels.append(level)
    return levels


def stack_levels(timestamps: Sequence[float], threshold_ms: float) -> list[int]:
    """Sliding-window assignment for time-ascending input.

    Matches :func:`stack_levels_naive` exactly. Predecessors within the threshold form
    a contiguous suffix of the processed events, so only the running max level of that
    suffix is needed; a monotonic deque keeps it in amortized O(1) per event.
    """
    levels: list[int] = []
    active: deque[int] = deque()  # indices, levels strictly decreasing front to back
    start = 0
    for i, current in enumerate(timestamps):
        while start < i and current - timestamps[start] >= threshold_ms:
            start += 1
        while active and active[0] < start:
            active.popleft()
        level = levels[active[0]] + 1 if active else 0
        levels.append(level)
        while active and levels[active[-1]] <= level:
            active.pop()
        active.append(i)
    return levels


def max_stack_height(levels: Sequence[int]) -> int:
    return 1 + max(levels) if levels else 1


def clamp_threshold_ms(threshold_ms: float) -> float:
    """Applied overlap threshold: NaN falls back to the default, negatives clamp to 0."""
    try:
        threshold = float(threshold_ms)
    except (TypeError, ValueError):
        threshold = math.nan
    if math.isnan(threshold):
        _LOG.warning(
            "overlap_threshold_invalid requested=%r applied_ms=%d",
            threshold_ms,
            DEFAULT_OVERLAP_THRESHOLD_MS,
        )
        return float(DEFAULT_OVERLAP_THRESHOLD_MS)
    if threshold < 0.0:
        _LOG.warning("overlap_threshold_clamped requested=%s applied_ms=0", threshold_ms)
        return 0.0
    return threshold


def build_lanes(
    events: Iterable[Event],
    *,
    threshold_ms: float = DEFAULT_OVERLAP_THRESHOLD_MS,
) -> list[Lane]:
    """Group timed events into per-tab lanes with stack levels, ascending by tab id."""
    threshold = clamp_threshold_ms(threshold_ms)

    grouped: dict[int, list[Event]] = {}
    for event in events:
        if event.timestamp_ms is None:
            continue
        grouped.setdefault(event.tab_id, []).append(event)

    lanes: list[Lane] = []
    for key in sorted(grouped):
        ordered = tuple(sorted(grouped[key], key=event_sort_key))
        timestamps = tuple(int(event.timestamp_ms) for event in ordered)
        lanes.append(
            Lane(
                key=key,
                events=ordered,
                timestamps=timestamps,
                stack_levels=tuple(stack_levels(timestamps, threshold)),
            )
        )
    return lanes
