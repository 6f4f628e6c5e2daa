"""View helpers for narrowing the loaded event set."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from eventscope.api.events import Event
from eventscope.core.query import filter_events


@dataclass(frozen=True)
class EventFilter:
    tab_id: int | None = None
    scope: str = "all"
    user_id: int | None = None
    query: str = ""

    @property
    def active(self) -> bool:
        return (
            self.tab_id is not None
            or self.scope != "all"
            or self.user_id is not None
            or bool(self.query.strip())
        )


def apply_event_filter(events: Iterable[Event], filt: EventFilter) -> list[Event]:
    scope = None if filt.scope == "all" else filt.scope
    return filter_events(events, tab_id=filt.tab_id, scope=scope, user_id=filt.user_id, text=filt.query)
