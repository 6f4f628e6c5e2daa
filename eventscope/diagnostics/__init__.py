"""Serialization helpers shared by loaders, exporters and log formatters."""

from eventscope.diagnostics.json_codec import dumps_bytes, dumps_text, loads, loads_lines

__all__ = ["dumps_bytes", "dumps_text", "loads", "loads_lines"]
