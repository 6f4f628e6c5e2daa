"""Event timeline inspector engine: hierarchy, windows, stacking and cursor queries."""

from eventscope.api.events import Event, Scope
from eventscope.core.snapshot import EventSnapshot, TimelineModelCache, build_timeline_model

__all__ = ["Event", "EventSnapshot", "Scope", "TimelineModelCache", "build_timeline_model"]
