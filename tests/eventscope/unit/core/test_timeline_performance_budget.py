from __future__ import annotations

from time import perf_counter

from eventscope.api.events import Event, Scope
from eventscope.core.snapshot import EventSnapshot, build_timeline_model
from eventscope.core.stacking import stack_levels


def test_model_build_and_cursor_queries_performance_budget() -> None:
    scopes = (Scope.PAGE, Scope.WIDGET, Scope.NONE, Scope.NONE)
    events = [
        Event(
            id=idx,
            tab_id=idx % 8,
            timestamp_ms=idx * 37,
            scope=scopes[idx % 4],
            parent_id=idx - 1 if idx % 4 else None,
            label=f"e{idx}",
        )
        for idx in range(50_000)
    ]
    snapshot = EventSnapshot.from_events(events)

    start = perf_counter()
    model = build_timeline_model(snapshot)
    for step in range(2_000):
        model.query(step * 911.0, 500.0)
    elapsed = perf_counter() - start

    assert model.window_stats.total_items == 50_000
    assert sum(len(lane.events) for lane in model.lanes) == 50_000
    assert elapsed < 4.0


def test_dense_stacking_stays_linear() -> None:
    timestamps = list(range(40_000))

    start = perf_counter()
    levels = stack_levels(timestamps, 1_000_000)
    elapsed = perf_counter() - start

    assert levels[-1] == 39_999
    assert elapsed < 0.5
