from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from eventscope.core.snapshot import EventSnapshot


@dataclass(frozen=True)
class LoadReport:
    """Counters describing one snapshot load."""

    source: str
    records: int
    loaded: int
    untimed: int
    skipped: int


class EventSource(Protocol):
    def load_snapshot(self) -> EventSnapshot: ...

    def last_report(self) -> LoadReport | None: ...

    def export_report(self, report: dict, path: Path) -> Path: ...
