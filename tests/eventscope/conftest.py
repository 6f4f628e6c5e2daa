from __future__ import annotations

import pytest

from eventscope.api.events import Event, Scope


@pytest.fixture
def scenario_events() -> list[Event]:
    """Tab 1: a root action, a page, a widget under the page and an action under the widget."""
    return [
        Event(id=1, tab_id=1, timestamp_ms=0, scope=Scope.NONE, parent_id=None, label="boot"),
        Event(id=2, tab_id=1, timestamp_ms=1_000, scope=Scope.PAGE, parent_id=None, label="home"),
        Event(id=3, tab_id=1, timestamp_ms=1_500, scope=Scope.WIDGET, parent_id=2, label="search"),
        Event(id=4, tab_id=1, timestamp_ms=1_600, scope=Scope.NONE, parent_id=3, label="type"),
    ]
