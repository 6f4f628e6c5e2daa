"""Public event and derived-view contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Scope(Enum):
    """Coarse scope tag carried by each source event."""

    NONE = "none"
    PAGE = "page"
    LEFT = "left"
    WIDGET = "widget"

    @classmethod
    def parse(cls, raw: object) -> "Scope":
        """Map loosely-typed scope values to a tag; unknown values read as NONE."""
        if isinstance(raw, Scope):
            return raw
        if raw is None:
            return cls.NONE
        value = str(raw).strip().lower()
        for scope in cls:
            if scope.value == value:
                return scope
        return cls.NONE

    @property
    def is_container(self) -> bool:
        return self in (Scope.PAGE, Scope.LEFT)


class NodeKind(Enum):
    """Closed set of hierarchy node kinds."""

    TAB = "tab"
    CONTAINER = "container"
    WIDGET = "widget"
    ACTION = "action"


class ContainerType(Enum):
    PAGE = "page"
    LEFT = "left"


@dataclass(frozen=True, slots=True)
class Event:
    """Immutable application event supplied by the event store."""

    id: int
    tab_id: int
    timestamp_ms: int | None
    scope: Scope = Scope.NONE
    parent_id: int | None = None
    label: str = ""
    user_id: int = 0
    action: str | None = None

    @property
    def has_timestamp(self) -> bool:
        return self.timestamp_ms is not None


@dataclass(slots=True)
class HierarchyNode:
    """Derived tree node; parents own their children list exclusively."""

    node_id: str
    kind: NodeKind
    label: str
    source_event: Event | None = None
    container_type: ContainerType | None = None
    children: list["HierarchyNode"] = field(default_factory=list)
    expanded: bool = False
    orphaned: bool = False

    @property
    def timestamp_ms(self) -> int | None:
        if self.source_event is None:
            return None
        return self.source_event.timestamp_ms


@dataclass(frozen=True, slots=True)
class TimeRange:
    """Closed display range in epoch milliseconds."""

    start_ms: int
    end_ms: int

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Epoch-aligned bucket of events with its own nested hierarchy."""

    window_id: int
    start_ms: int
    end_ms: int
    events: tuple[Event, ...]
    hierarchy: tuple[HierarchyNode, ...] = ()
    label: str = ""

    @property
    def total_items(self) -> int:
        return len(self.events)

    def contains(self, timestamp_ms: float) -> bool:
        return self.start_ms <= timestamp_ms < self.end_ms


@dataclass(frozen=True, slots=True)
class Lane:
    """Time-ascending events sharing one tab key, with per-event stack levels."""

    key: int
    events: tuple[Event, ...]
    timestamps: tuple[int, ...]
    stack_levels: tuple[int, ...]

    @property
    def max_stack_height(self) -> int:
        if not self.stack_levels:
            return 1
        return 1 + max(self.stack_levels)


@dataclass(frozen=True, slots=True)
class CursorHit:
    """Resolver result entry for one event near a cursor time."""

    event: Event
    lane_key: int
    distance_ms: float
    stack_level: int = 0
