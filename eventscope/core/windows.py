"""Epoch-aligned fixed-duration time window partitioning."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from eventscope.api.events import Event, TimeRange, TimeWindow
from eventscope.core.hierarchy import build_hierarchy, event_sort_key

_LOG = logging.getLogger("eventscope.core")

DEFAULT_WINDOW_SIZE_S = 5.0
MIN_WINDOW_SIZE_MS = 1
DEFAULT_AXIS_PADDING_MS = 10_000
DEFAULT_AXIS_TICK_MS = 5_000

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
# Epoch-ms bounds that datetime can represent as a UTC clock value.
MIN_TIMESTAMP_MS = (datetime.min.replace(tzinfo=UTC) - _EPOCH) // timedelta(milliseconds=1)
MAX_TIMESTAMP_MS = (datetime.max.replace(tzinfo=UTC) - _EPOCH) // timedelta(milliseconds=1)


def window_size_ms(window_size_s: float) -> int:
    """Convert a window size in seconds to whole milliseconds, clamped to >= 1 ms."""
    try:
        seconds = float(window_size_s)
    except (TypeError, ValueError):
        seconds = math.nan
    if not math.isfinite(seconds):
        _LOG.warning(
            "window_size_invalid requested=%r applied_s=%s", window_size_s, DEFAULT_WINDOW_SIZE_S
        )
        seconds = DEFAULT_WINDOW_SIZE_S
    size_ms = int(round(seconds * 1000.0))
    if size_ms < MIN_WINDOW_SIZE_MS:
        _LOG.warning(
            "window_size_clamped requested=%r applied_ms=%d", window_size_s, MIN_WINDOW_SIZE_MS
        )
        return MIN_WINDOW_SIZE_MS
    return size_ms


def window_start(timestamp_ms: int, size_ms: int) -> int:
    """Start of the window holding ``timestamp_ms``, measured from absolute epoch."""
    return (int(timestamp_ms) // size_ms) * size_ms


def _utc_moment(timestamp_ms: float) -> datetime | None:
    try:
        return _EPOCH + timedelta(milliseconds=timestamp_ms)
    except (OverflowError, ValueError):
        return None


def _raw_ms(timestamp_ms: float) -> str:
    if isinstance(timestamp_ms, int):
        return f"{timestamp_ms}ms"
    return f"{timestamp_ms:.0f}ms"


def format_clock(timestamp_ms: float) -> str:
    """``HH:MM:SS`` in UTC; raw milliseconds when outside the datetime range."""
    moment = _utc_moment(timestamp_ms)
    if moment is None:
        return _raw_ms(timestamp_ms)
    return moment.strftime("%H:%M:%S")


def format_precise(timestamp_ms: float) -> str:
    """``HH:MM:SS.mmm`` in UTC; raw milliseconds when outside the datetime range."""
    moment = _utc_moment(timestamp_ms)
    if moment is None:
        return _raw_ms(timestamp_ms)
    return f"{moment:%H:%M:%S}.{moment.microsecond // 1000:03d}"


def window_label(start_ms: int, end_ms: int) -> str:
    return f"{format_clock(start_ms)}–{format_clock(end_ms)}"


def partition_windows(
    events: Iterable[Event],
    *,
    window_size_s: float = DEFAULT_WINDOW_SIZE_S,
) -> list[TimeWindow]:
    """Bucket events into occupied epoch-aligned windows, ascending by start time.

    Events without a timestamp are skipped; gaps between occupied windows are not
    filled with empty windows.
    """
    size = window_size_ms(window_size_s)
    buckets: dict[int, list[Event]] = {}
    skipped = 0
    for event in events:
        if event.timestamp_ms is None:
            skipped += 1
            continue
        buckets.setdefault(window_start(event.timestamp_ms, size), []).append(event)
    if skipped:
        _LOG.debug("windows_skipped_untimed count=%d", skipped)

    windows: list[TimeWindow] = []
    for start in sorted(buckets):
        members = tuple(sorted(buckets[start], key=event_sort_key))
        end = start + size
        windows.append(
            TimeWindow(
                window_id=start // size,
                start_ms=start,
                end_ms=end,
                events=members,
                hierarchy=tuple(build_hierarchy(members)),
                label=window_label(start, end),
            )
        )
    return windows


def display_range(
    events: Iterable[Event],
    *,
    padding_ms: int = DEFAULT_AXIS_PADDING_MS,
) -> TimeRange | None:
    """Continuous display axis ``[min - padding, max + padding]``; ``None`` without data."""
    timestamps = [event.timestamp_ms for event in events if event.timestamp_ms is not None]
    if not timestamps:
        return None
    pad = max(0, int(padding_ms))
    return TimeRange(start_ms=min(timestamps) - pad, end_ms=max(timestamps) + pad)


def axis_ticks(
    time_range: TimeRange | None,
    *,
    tick_interval_ms: int = DEFAULT_AXIS_TICK_MS,
) -> list[int]:
    """Epoch-aligned tick times covering ``time_range`` at a fixed interval."""
    if time_range is None:
        return []
    interval = max(1, int(tick_interval_ms))
    current = window_start(time_range.start_ms, interval)
    ticks: list[int] = []
    while current <= time_range.end_ms:
        ticks.append(current)
        current += interval
    return ticks
