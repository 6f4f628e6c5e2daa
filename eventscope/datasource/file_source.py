from __future__ import annotations

import logging
import math
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from eventscope.api.events import Event, Scope
from eventscope.core.snapshot import EventSnapshot
from eventscope.core.windows import MAX_TIMESTAMP_MS, MIN_TIMESTAMP_MS
from eventscope.datasource.base import EventSource, LoadReport
from eventscope.datasource.export import export_json_report
from eventscope.diagnostics.json_codec import loads, loads_lines

_LOG = logging.getLogger("eventscope.datasource")


def parse_timestamp_ms(value: object) -> int | None:
    """Epoch milliseconds from an ISO-8601 string or a numeric epoch-ms value.

    Numbers outside the range a UTC ``datetime`` can represent read as untimed.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        stamp = math.floor(value)
        if not MIN_TIMESTAMP_MS <= stamp <= MAX_TIMESTAMP_MS:
            return None
        return stamp
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return int(math.floor(moment.timestamp() * 1000.0 + 0.5))


def _optional_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _first(record: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return None


def parse_event(record: object) -> Event | None:
    """Build an Event from one loosely-typed record; ``None`` when id or tab is unusable."""
    if not isinstance(record, dict):
        return None
    event_id = _optional_int(record.get("id"))
    tab_id = _optional_int(_first(record, "tabId", "tab_id"))
    if event_id is None or tab_id is None:
        return None
    action = record.get("action")
    return Event(
        id=event_id,
        tab_id=tab_id,
        timestamp_ms=parse_timestamp_ms(_first(record, "timestamp", "timestamp_ms", "date")),
        scope=Scope.parse(record.get("scope")),
        parent_id=_optional_int(_first(record, "parentId", "parent_id")),
        label=str(_first(record, "property", "label") or ""),
        user_id=_optional_int(_first(record, "userId", "user_id")) or 0,
        action=str(action) if action is not None else None,
    )


class FileEventSource(EventSource):
    """Event snapshot loaded from a JSON array, ``{"events": [...]}`` or JSON-lines file."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._report: LoadReport | None = None

    def load_snapshot(self) -> EventSnapshot:
        raw = self._path.read_bytes()
        broken_lines: list[int] = []
        records = self._decode(raw, broken_lines)
        events: list[Event] = []
        skipped = len(broken_lines)
        for record in records:
            event = parse_event(record)
            if event is None:
                skipped += 1
                continue
            events.append(event)
        if skipped:
            _LOG.warning(
                "event_records_skipped path=%s count=%d undecodable_lines=%s",
                self._path,
                skipped,
                broken_lines[:20],
            )
        snapshot = EventSnapshot.from_events(events)
        self._report = LoadReport(
            source=str(self._path),
            records=len(records) + len(broken_lines),
            loaded=len(snapshot.events),
            untimed=len(snapshot.rejected),
            skipped=skipped,
        )
        _LOG.info(
            "snapshot_loaded path=%s events=%d untimed=%d skipped=%d",
            self._path,
            len(snapshot.events),
            len(snapshot.rejected),
            skipped,
        )
        return snapshot

    def last_report(self) -> LoadReport | None:
        return self._report

    def export_report(self, report: dict, path: Path) -> Path:
        return export_json_report(report, path)

    def _decode(self, raw: bytes, broken_lines: list[int]) -> list[Any]:
        if self._path.suffix.lower() in {".jsonl", ".ndjson"}:
            return loads_lines(raw, errors=broken_lines)
        payload = loads(raw)
        if isinstance(payload, dict):
            payload = payload.get("events", [])
        if not isinstance(payload, list):
            _LOG.warning("event_payload_unrecognized path=%s", self._path)
            return []
        return payload
