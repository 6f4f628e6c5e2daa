"""Nearest-event queries for a cursor time under a symmetric tolerance."""

from __future__ import annotations

import logging
import math
from bisect import bisect_left, bisect_right
from collections.abc import Sequence

from eventscope.api.events import CursorHit, Lane, TimeWindow
from eventscope.api.interaction import ResolveMode

_LOG = logging.getLogger("eventscope.core")

MIN_TOLERANCE_MS = 1.0
MAX_TOLERANCE_MS = 10_000.0
DEFAULT_TOLERANCE_MS = 500.0


def clamp_tolerance_ms(tolerance_ms: float) -> float:
    try:
        value = float(tolerance_ms)
    except (TypeError, ValueError):
        value = math.nan
    if math.isnan(value):
        _LOG.warning("tolerance_invalid requested=%r applied_ms=%s", tolerance_ms, DEFAULT_TOLERANCE_MS)
        return DEFAULT_TOLERANCE_MS
    clamped = min(MAX_TOLERANCE_MS, max(MIN_TOLERANCE_MS, value))
    if clamped != value:
        _LOG.debug("tolerance_clamped requested=%s applied_ms=%s", value, clamped)
    return clamped


def _candidates(lane: Lane, cursor_ms: float, tolerance_ms: float) -> range:
    lo = bisect_left(lane.timestamps, cursor_ms - tolerance_ms)
    hi = bisect_right(lane.timestamps, cursor_ms + tolerance_ms)
    return range(lo, hi)


def _hit(lane: Lane, index: int, cursor_ms: float) -> CursorHit:
    return CursorHit(
        event=lane.events[index],
        lane_key=lane.key,
        distance_ms=abs(lane.timestamps[index] - cursor_ms),
        stack_level=lane.stack_levels[index],
    )


def events_within_tolerance(
    lanes: Sequence[Lane],
    cursor_ms: float,
    tolerance_ms: float,
) -> list[CursorHit]:
    """Every lane event with ``|t - cursor| <= tolerance``, lane order then time order."""
    tolerance = clamp_tolerance_ms(tolerance_ms)
    hits: list[CursorHit] = []
    for lane in lanes:
        for index in _candidates(lane, cursor_ms, tolerance):
            hits.append(_hit(lane, index, cursor_ms))
    return hits


def nearest_per_lane(
    lanes: Sequence[Lane],
    cursor_ms: float,
    tolerance_ms: float,
) -> list[CursorHit]:
    """At most one hit per lane: the closest event within tolerance, earlier wins ties."""
    tolerance = clamp_tolerance_ms(tolerance_ms)
    hits: list[CursorHit] = []
    for lane in lanes:
        best: CursorHit | None = None
        for index in _candidates(lane, cursor_ms, tolerance):
            hit = _hit(lane, index, cursor_ms)
            if best is None or hit.distance_ms < best.distance_ms:
                best = hit
        if best is not None:
            hits.append(best)
    return hits


def resolve(
    lanes: Sequence[Lane],
    cursor_ms: float,
    tolerance_ms: float,
    *,
    mode: ResolveMode = ResolveMode.NEAREST_PER_LANE,
) -> list[CursorHit]:
    if mode is ResolveMode.ALL_WITHIN:
        return events_within_tolerance(lanes, cursor_ms, tolerance_ms)
    return nearest_per_lane(lanes, cursor_ms, tolerance_ms)


def window_at(windows: Sequence[TimeWindow], cursor_ms: float) -> TimeWindow | None:
    """Occupied window containing the cursor, if any."""
    starts = [window.start_ms for window in windows]
    index = bisect_right(starts, cursor_ms) - 1
    if index < 0:
        return None
    window = windows[index]
    return window if window.contains(cursor_ms) else None
