"""Hover/frozen cursor machine driving resolver queries."""

from __future__ import annotations

import logging
from typing import Callable

from eventscope.api.events import CursorHit
from eventscope.api.interaction import (
    CancelRequested,
    Clicked,
    CloseRequested,
    CursorMode,
    CursorSignal,
    OutsideInteraction,
    PointerLeft,
    PointerMoved,
    ZoomChanged,
)
from eventscope.core.resolver import DEFAULT_TOLERANCE_MS
from eventscope.runtime.projection import TimeScale

_LOG = logging.getLogger("eventscope.runtime")

CursorQuery = Callable[[float, float], list[CursorHit]]


class CursorInteractionMachine:
    """Idle/hover/frozen cursor state.

    Hover re-issues the resolver query on every pointer move. Freezing captures the
    cursor as a time value and caches one query result; the frozen marker's pixel
    position is always projected from that time under the current scale.
    """

    def __init__(
        self,
        query: CursorQuery,
        scale: TimeScale,
        *,
        hover_tolerance_ms: float = DEFAULT_TOLERANCE_MS,
        freeze_tolerance_ms: float = 1_000.0,
    ) -> None:
        self._query = query
        self._scale = scale
        self._hover_tolerance_ms = float(hover_tolerance_ms)
        self._freeze_tolerance_ms = float(freeze_tolerance_ms)
        self._mode = CursorMode.IDLE
        self._pointer_x: float | None = None
        self._hover_time_ms: float | None = None
        self._hover_hits: list[CursorHit] = []
        self._frozen_time_ms: float | None = None
        self._frozen_hits: list[CursorHit] = []
        self.queries_issued = 0

    @property
    def mode(self) -> CursorMode:
        return self._mode

    @property
    def scale(self) -> TimeScale:
        return self._scale

    @property
    def pointer_x(self) -> float | None:
        return self._pointer_x

    @property
    def frozen_time_ms(self) -> float | None:
        return self._frozen_time_ms

    def cursor_time_ms(self) -> float | None:
        """Time of the active cursor, or ``None`` when idle."""
        if self._mode is CursorMode.FROZEN:
            return self._frozen_time_ms
        if self._mode is CursorMode.HOVER:
            return self._hover_time_ms
        return None

    def cursor_x(self) -> float | None:
        """Pixel position of the active cursor under the current scale."""
        cursor = self.cursor_time_ms()
        if cursor is None:
            return None
        return self._scale.to_pixel(cursor)

    def active_hits(self) -> list[CursorHit]:
        if self._mode is CursorMode.FROZEN:
            return list(self._frozen_hits)
        if self._mode is CursorMode.HOVER:
            return list(self._hover_hits)
        return []

    def handle(self, signal: CursorSignal) -> CursorMode:
        """Dispatch one interaction signal and return the resulting mode."""
        if isinstance(signal, PointerMoved):
            self.pointer_move(signal.x)
        elif isinstance(signal, PointerLeft):
            self.pointer_leave()
        elif isinstance(signal, Clicked):
            self.click()
        elif isinstance(signal, (CloseRequested, CancelRequested, OutsideInteraction)):
            self.release()
        elif isinstance(signal, ZoomChanged):
            self.set_pixels_per_second(signal.pixels_per_second)
        else:
            raise TypeError(f"unsupported cursor signal: {type(signal).__name__}")
        return self._mode

    def pointer_move(self, x: float) -> None:
        self._pointer_x = float(x)
        if self._mode is CursorMode.FROZEN:
            return
        self._mode = CursorMode.HOVER
        self._hover_at(self._scale.to_time(self._pointer_x))

    def hover_at_time(self, cursor_ms: float) -> None:
        """Hover at an exact time; the pointer is placed at its projected pixel."""
        self._pointer_x = self._scale.to_pixel(cursor_ms)
        if self._mode is CursorMode.FROZEN:
            return
        self._mode = CursorMode.HOVER
        self._hover_at(float(cursor_ms))

    def pointer_leave(self) -> None:
        self._pointer_x = None
        if self._mode is CursorMode.HOVER:
            self._to_idle()

    def click(self) -> None:
        if self._mode is CursorMode.FROZEN:
            self.release()
            return
        if self._mode is not CursorMode.HOVER or self._hover_time_ms is None:
            return
        self._frozen_time_ms = self._hover_time_ms
        self._frozen_hits = self._issue(self._frozen_time_ms, self._freeze_tolerance_ms)
        self._mode = CursorMode.FROZEN
        _LOG.debug(
            "cursor_frozen time_ms=%.3f hits=%d", self._frozen_time_ms, len(self._frozen_hits)
        )

    def release(self) -> None:
        """Close, cancel or outside interaction: drop back to idle and clear caches."""
        if self._mode is CursorMode.FROZEN:
            _LOG.debug("cursor_released time_ms=%.3f", self._frozen_time_ms)
        self._to_idle()

    def set_pixels_per_second(self, pixels_per_second: float) -> None:
        self._scale = self._scale.with_pixels_per_second(pixels_per_second)
        if self._mode is CursorMode.HOVER and self._pointer_x is not None:
            self._hover_at(self._scale.to_time(self._pointer_x))

    def _hover_at(self, cursor_ms: float) -> None:
        self._hover_time_ms = cursor_ms
        self._hover_hits = self._issue(cursor_ms, self._hover_tolerance_ms)

    def _issue(self, cursor_ms: float, tolerance_ms: float) -> list[CursorHit]:
        self.queries_issued += 1
        return list(self._query(cursor_ms, tolerance_ms))

    def _to_idle(self) -> None:
        self._mode = CursorMode.IDLE
        self._hover_time_ms = None
        self._hover_hits = []
        self._frozen_time_ms = None
        self._frozen_hits = []
