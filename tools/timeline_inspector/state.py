"""Timeline inspector state container."""

from __future__ import annotations

from dataclasses import dataclass, field

from eventscope.core.snapshot import EventSnapshot, TimelineModel, TimelineModelCache
from eventscope.datasource.base import LoadReport
from eventscope.runtime.config import InspectorConfig


@dataclass
class InspectorState:
    config: InspectorConfig = field(default_factory=InspectorConfig)
    snapshot: EventSnapshot | None = None
    report: LoadReport | None = None
    cache: TimelineModelCache = field(default_factory=TimelineModelCache)

    def model(self) -> TimelineModel | None:
        if self.snapshot is None:
            return None
        return self.cache.get(
            self.snapshot,
            window_size_s=self.config.window_size_s,
            threshold_ms=self.config.overlap_threshold_ms,
        )
