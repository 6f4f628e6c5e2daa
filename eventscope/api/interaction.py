"""Public cursor interaction contracts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CursorMode(Enum):
    """Cursor interaction states."""

    IDLE = "idle"
    HOVER = "hover"
    FROZEN = "frozen"


class ResolveMode(Enum):
    """Resolver query shape issued for a cursor time."""

    ALL_WITHIN = "all"
    NEAREST_PER_LANE = "nearest"


@dataclass(frozen=True, slots=True)
class PointerMoved:
    """Pointer moved to x, in timeline pixels from the scale origin."""

    x: float


@dataclass(frozen=True, slots=True)
class PointerLeft:
    """Pointer left the tracked surface."""


@dataclass(frozen=True, slots=True)
class Clicked:
    """Primary click on the tracked surface."""


@dataclass(frozen=True, slots=True)
class CloseRequested:
    """Inspector panel close control activated."""


@dataclass(frozen=True, slots=True)
class CancelRequested:
    """Cancel/escape key pressed."""


@dataclass(frozen=True, slots=True)
class OutsideInteraction:
    """Pointer down outside the tracked surface."""


@dataclass(frozen=True, slots=True)
class ZoomChanged:
    """Time-to-pixel scale changed."""

    pixels_per_second: float


CursorSignal = (
    PointerMoved
    | PointerLeft
    | Clicked
    | CloseRequested
    | CancelRequested
    | OutsideInteraction
    | ZoomChanged
)
