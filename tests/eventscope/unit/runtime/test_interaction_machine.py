from __future__ import annotations

import pytest

from eventscope.api.events import CursorHit
from eventscope.api.interaction import (
    CancelRequested,
    Clicked,
    CloseRequested,
    CursorMode,
    OutsideInteraction,
    PointerLeft,
    PointerMoved,
    ZoomChanged,
)
from eventscope.core.snapshot import EventSnapshot, build_timeline_model
from eventscope.runtime.interaction import CursorInteractionMachine
from eventscope.runtime.projection import TimeScale


class _RecordingQuery:
    def __init__(self, model=None) -> None:
        self.calls: list[tuple[float, float]] = []
        self._model = model

    def __call__(self, cursor_ms: float, tolerance_ms: float) -> list[CursorHit]:
        self.calls.append((cursor_ms, tolerance_ms))
        if self._model is None:
            return []
        return self._model.query(cursor_ms, tolerance_ms)


def _machine(query=None, *, pps: float = 100.0) -> tuple[CursorInteractionMachine, _RecordingQuery]:
    recorder = query or _RecordingQuery()
    machine = CursorInteractionMachine(
        recorder,
        TimeScale(origin_ms=0.0, pixels_per_second=pps),
        hover_tolerance_ms=500,
        freeze_tolerance_ms=1_000,
    )
    return machine, recorder


def test_machine_starts_idle_without_queries() -> None:
    machine, recorder = _machine()
    assert machine.mode is CursorMode.IDLE
    assert machine.cursor_time_ms() is None
    assert machine.cursor_x() is None
    assert machine.active_hits() == []
    assert recorder.calls == []


def test_pointer_move_enters_hover_and_queries_each_move() -> None:
    machine, recorder = _machine()

    assert machine.handle(PointerMoved(x=155.0)) is CursorMode.HOVER
    machine.handle(PointerMoved(x=160.0))

    assert recorder.calls == [(1_550.0, 500.0), (1_600.0, 500.0)]
    assert machine.cursor_time_ms() == 1_600.0
    assert machine.queries_issued == 2


def test_pointer_leave_returns_hover_to_idle() -> None:
    machine, _ = _machine()
    machine.handle(PointerMoved(x=10.0))
    assert machine.handle(PointerLeft()) is CursorMode.IDLE
    assert machine.pointer_x is None


def test_click_while_idle_is_ignored() -> None:
    machine, recorder = _machine()
    assert machine.handle(Clicked()) is CursorMode.IDLE
    assert recorder.calls == []


def test_click_freezes_with_single_query_at_freeze_tolerance(scenario_events) -> None:
    model = build_timeline_model(EventSnapshot.from_events(scenario_events))
    machine, recorder = _machine(_RecordingQuery(model))
    machine.handle(PointerMoved(x=155.0))

    assert machine.handle(Clicked()) is CursorMode.FROZEN
    assert recorder.calls[-1] == (1_550.0, 1_000.0)
    assert machine.frozen_time_ms == 1_550.0
    assert [hit.event.id for hit in machine.active_hits()] == [3]


def test_frozen_ignores_pointer_motion_and_leave() -> None:
    machine, recorder = _machine()
    machine.handle(PointerMoved(x=155.0))
    machine.handle(Clicked())
    issued = machine.queries_issued

    machine.handle(PointerMoved(x=900.0))
    machine.handle(PointerLeft())

    assert machine.mode is CursorMode.FROZEN
    assert machine.cursor_time_ms() == 1_550.0
    assert machine.queries_issued == issued
    assert len(recorder.calls) == issued


def test_frozen_zoom_keeps_time_and_reprojects_marker() -> None:
    machine, recorder = _machine()
    machine.handle(PointerMoved(x=155.0))
    machine.handle(Clicked())
    issued = machine.queries_issued
    frozen_hits = machine.active_hits()

    for pps in (10.0, 1_000.0, 37.5, 250.0):
        machine.handle(ZoomChanged(pixels_per_second=pps))
        assert machine.frozen_time_ms == 1_550.0
        assert machine.cursor_x() == pytest.approx(1.55 * pps)
        assert machine.active_hits() == frozen_hits

    assert machine.queries_issued == issued
    assert len(recorder.calls) == issued


def test_zoom_is_clamped_to_scale_bounds() -> None:
    machine, _ = _machine()
    machine.handle(ZoomChanged(pixels_per_second=5_000.0))
    assert machine.scale.pixels_per_second == 1_000.0
    machine.handle(ZoomChanged(pixels_per_second=1.0))
    assert machine.scale.pixels_per_second == 10.0


def test_zoom_while_hovering_requeries_at_pointer() -> None:
    machine, recorder = _machine()
    machine.handle(PointerMoved(x=200.0))
    machine.handle(ZoomChanged(pixels_per_second=50.0))

    assert recorder.calls == [(2_000.0, 500.0), (4_000.0, 500.0)]
    assert machine.cursor_time_ms() == 4_000.0


def test_zoom_while_idle_does_not_query() -> None:
    machine, recorder = _machine()
    machine.handle(ZoomChanged(pixels_per_second=80.0))
    assert recorder.calls == []
    assert machine.mode is CursorMode.IDLE


def test_second_click_unfreezes() -> None:
    machine, _ = _machine()
    machine.handle(PointerMoved(x=10.0))
    machine.handle(Clicked())
    assert machine.handle(Clicked()) is CursorMode.IDLE
    assert machine.frozen_time_ms is None
    assert machine.active_hits() == []


@pytest.mark.parametrize("signal", [CloseRequested(), CancelRequested(), OutsideInteraction()])
def test_release_signals_return_to_idle_from_any_state(signal) -> None:
    machine, _ = _machine()
    assert machine.handle(signal) is CursorMode.IDLE

    machine.handle(PointerMoved(x=10.0))
    assert machine.handle(signal) is CursorMode.IDLE

    machine.handle(PointerMoved(x=10.0))
    machine.handle(Clicked())
    assert machine.handle(signal) is CursorMode.IDLE
    assert machine.cursor_time_ms() is None


def test_hover_after_release_queries_again() -> None:
    machine, recorder = _machine()
    machine.handle(PointerMoved(x=10.0))
    machine.handle(Clicked())
    machine.handle(CancelRequested())
    machine.handle(PointerMoved(x=20.0))

    assert machine.mode is CursorMode.HOVER
    assert recorder.calls[-1] == (200.0, 500.0)


def test_unknown_signal_raises_type_error() -> None:
    machine, _ = _machine()
    with pytest.raises(TypeError):
        machine.handle(object())  # type: ignore[arg-type]


def test_hover_at_time_keeps_the_exact_cursor_time() -> None:
    recorder = _RecordingQuery()
    machine = CursorInteractionMachine(
        recorder,
        TimeScale(origin_ms=-10_000.7, pixels_per_second=37.0),
        hover_tolerance_ms=500,
        freeze_tolerance_ms=1_000,
    )

    machine.hover_at_time(1_550.3)
    machine.click()

    assert machine.mode is CursorMode.FROZEN
    assert machine.frozen_time_ms == 1_550.3
    assert recorder.calls == [(1_550.3, 500.0), (1_550.3, 1_000.0)]
    assert machine.pointer_x == machine.scale.to_pixel(1_550.3)

    machine.hover_at_time(9_000)
    assert machine.frozen_time_ms == 1_550.3
    assert len(recorder.calls) == 2
