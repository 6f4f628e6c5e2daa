from __future__ import annotations

from eventscope.api.events import Event, Scope
from eventscope.core.aggregations import (
    NOT_AVAILABLE,
    compute_hierarchy_stats,
    compute_window_stats,
    describe_window_size,
    items_per_tab,
    round_half_up,
)
from eventscope.core.hierarchy import build_hierarchy
from eventscope.core.windows import partition_windows


def _event(event_id: int, ts: int | None, *, tab: int = 1, scope: Scope = Scope.NONE, parent=None) -> Event:
    return Event(id=event_id, tab_id=tab, timestamp_ms=ts, scope=scope, parent_id=parent, label=f"e{event_id}")


def test_empty_window_stats_use_not_available_markers() -> None:
    stats = compute_window_stats([], window_size_s=5)

    assert stats.total_windows == 0
    assert stats.total_items == 0
    assert stats.average_items_per_window == 0.0
    assert stats.busiest_window == NOT_AVAILABLE
    assert stats.max_items_in_window == 0
    assert stats.time_span == NOT_AVAILABLE
    assert stats.window_size == "5 seconds"


def test_window_stats_for_scenario(scenario_events) -> None:
    windows = partition_windows(scenario_events)
    stats = compute_window_stats(windows)

    assert stats.total_windows == 1
    assert stats.total_items == 4
    assert stats.average_items_per_window == 4.0
    assert stats.busiest_window == "00:00:00–00:00:05"
    assert stats.max_items_in_window == 4
    assert stats.time_span == "00:00:00 to 00:00:05"


def test_busiest_window_tie_goes_to_earliest() -> None:
    windows = partition_windows(
        [_event(1, 0), _event(2, 100), _event(3, 5_000), _event(4, 5_100), _event(5, 12_000)]
    )
    stats = compute_window_stats(windows)

    assert stats.busiest_window == windows[0].label
    assert stats.max_items_in_window == 2
    assert stats.average_items_per_window == 1.7
    assert stats.time_span == "00:00:00 to 00:00:15"


def test_round_half_up() -> None:
    assert round_half_up(2.25) == 2.3
    assert round_half_up(2.35) == 2.4
    assert round_half_up(0.05) == 0.1
    assert round_half_up(2.5, digits=0) == 3.0
    assert round_half_up(1 / 3) == 0.3


def test_average_rounds_half_up() -> None:
    # 5 items over 2 windows is 2.5; 9 over 4 is 2.25.
    events = [_event(i, 1_000 * i) for i in range(4)] + [_event(10, 7_000)]
    stats = compute_window_stats(partition_windows(events))
    assert stats.average_items_per_window == 2.5

    events = [_event(i, ts) for i, ts in enumerate([0, 1, 2, 5_000, 5_001, 10_000, 10_001, 15_000, 15_001])]
    stats = compute_window_stats(partition_windows(events))
    assert stats.average_items_per_window == 2.3


def test_describe_window_size() -> None:
    assert describe_window_size(1) == "1 second"
    assert describe_window_size(5) == "5 seconds"
    assert describe_window_size(0.5) == "0.5 seconds"


def test_describe_window_size_reports_applied_size() -> None:
    assert describe_window_size(0) == "0.001 seconds"
    assert describe_window_size(-4) == "0.001 seconds"
    assert describe_window_size(0.0004) == "0.001 seconds"
    assert describe_window_size(float("nan")) == "5 seconds"
    assert describe_window_size(1.0004) == "1 second"


def test_hierarchy_stats_count_every_node_kind() -> None:
    trees = build_hierarchy(
        [
            _event(1, 0, scope=Scope.PAGE),
            _event(2, 10, scope=Scope.LEFT),
            _event(3, 20, scope=Scope.WIDGET, parent=1),
            _event(4, 30, scope=Scope.WIDGET, parent=99),
            _event(5, 40, parent=3),
            _event(6, 50),
            _event(7, 60, tab=2),
        ]
    )
    stats = compute_hierarchy_stats(trees)

    assert stats.tabs == 2
    assert stats.containers == 3
    assert stats.pages == 2
    assert stats.lefts == 1
    assert stats.orphaned_containers == 1
    assert stats.widgets == 2
    assert stats.actions == 3
    assert stats.total_nodes == 10


def test_hierarchy_stats_empty() -> None:
    stats = compute_hierarchy_stats([])
    assert stats.total_nodes == 0
    assert stats.tabs == 0


def test_items_per_tab_skips_untimed() -> None:
    counts = items_per_tab([_event(1, 0, tab=3), _event(2, None, tab=1), _event(3, 5, tab=3), _event(4, 1, tab=2)])
    assert counts == {2: 1, 3: 2}
    assert list(counts) == [2, 3]
