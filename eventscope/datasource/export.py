from __future__ import annotations

from pathlib import Path

from eventscope.diagnostics.json_codec import dumps_bytes


def export_json_report(payload: dict, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dumps_bytes(payload, pretty=True))
    return path
