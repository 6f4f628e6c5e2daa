"""Event snapshot loaders."""

from eventscope.datasource.base import EventSource, LoadReport
from eventscope.datasource.file_source import FileEventSource, parse_event, parse_timestamp_ms

__all__ = ["EventSource", "FileEventSource", "LoadReport", "parse_event", "parse_timestamp_ms"]
