from __future__ import annotations

from collections.abc import Iterable

from eventscope.api.events import Event, Scope


def filter_events(
    events: Iterable[Event],
    *,
    tab_id: int | None = None,
    scope: Scope | str | None = None,
    user_id: int | None = None,
    start_ms: int | None = None,
    end_ms: int | None = None,
    text: str | None = None,
) -> list[Event]:
    """Basic event filter predicates for inspector views; ``end_ms`` is exclusive."""
    out = list(events)
    if tab_id is not None:
        out = [e for e in out if e.tab_id == tab_id]
    if scope is not None:
        wanted = Scope.parse(scope)
        out = [e for e in out if e.scope is wanted]
    if user_id is not None:
        out = [e for e in out if e.user_id == user_id]
    if start_ms is not None:
        out = [e for e in out if e.timestamp_ms is not None and e.timestamp_ms >= start_ms]
    if end_ms is not None:
        out = [e for e in out if e.timestamp_ms is not None and e.timestamp_ms < end_ms]
    if text is not None and text.strip():
        needle = text.lower().strip()
        out = [
            e
            for e in out
            if needle in e.label.lower()
            or needle in (e.action or "").lower()
            or needle in e.scope.value
        ]
    return out
