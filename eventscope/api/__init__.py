"""Public contracts for events, derived views and cursor interaction."""

from eventscope.api.events import (
    ContainerType,
    CursorHit,
    Event,
    HierarchyNode,
    Lane,
    NodeKind,
    Scope,
    TimeRange,
    TimeWindow,
)
from eventscope.api.interaction import (
    CancelRequested,
    Clicked,
    CloseRequested,
    CursorMode,
    CursorSignal,
    OutsideInteraction,
    PointerLeft,
    PointerMoved,
    ResolveMode,
    ZoomChanged,
)
from eventscope.api.logging import InspectorLoggingConfig, JsonFormatter

__all__ = [
    "CancelRequested",
    "Clicked",
    "CloseRequested",
    "ContainerType",
    "CursorHit",
    "CursorMode",
    "CursorSignal",
    "Event",
    "HierarchyNode",
    "InspectorLoggingConfig",
    "JsonFormatter",
    "Lane",
    "NodeKind",
    "OutsideInteraction",
    "PointerLeft",
    "PointerMoved",
    "ResolveMode",
    "Scope",
    "TimeRange",
    "TimeWindow",
    "ZoomChanged",
]
