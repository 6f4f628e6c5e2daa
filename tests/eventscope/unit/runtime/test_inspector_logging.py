from __future__ import annotations

import logging

from eventscope.api.logging import InspectorLoggingConfig, JsonFormatter
from eventscope.diagnostics.json_codec import loads
from eventscope.runtime.logging import (
    configure_inspector_logging,
    setup_inspector_logging,
    shutdown_inspector_logging,
)


def test_setup_inspector_logging_adds_handler_when_missing(monkeypatch) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        root.handlers.clear()
        root.setLevel(logging.NOTSET)
        monkeypatch.setenv("EVENTSCOPE_LOG_LEVEL", "DEBUG")
        setup_inspector_logging()
        assert root.handlers
        assert root.level == logging.DEBUG
    finally:
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_setup_inspector_logging_does_not_override_existing_handlers() -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    sentinel = logging.NullHandler()
    try:
        root.handlers.clear()
        root.addHandler(sentinel)
        root.setLevel(logging.WARNING)
        setup_inspector_logging()
        assert root.handlers == [sentinel]
        assert root.level == logging.WARNING
    finally:
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_configure_inspector_logging_streams_json_to_file(tmp_path) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    log_path = tmp_path / "logs" / "inspector.jsonl"
    try:
        configure_inspector_logging(
            InspectorLoggingConfig(level_name="info", file_path=str(log_path), file_format="json")
        )
        logging.getLogger("eventscope.core").info("windows_built count=%d", 3, extra={"lane": 2})
        shutdown_inspector_logging()

        record = loads(log_path.read_text(encoding="utf-8").splitlines()[0])
        assert record["level"] == "INFO"
        assert record["logger"] == "eventscope.core"
        assert record["msg"] == "windows_built count=3"
        assert record["fields"] == {"lane": 2}
    finally:
        shutdown_inspector_logging()
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_json_formatter_reprs_non_scalar_extras() -> None:
    record = logging.LogRecord("eventscope", logging.WARNING, __file__, 1, "hit", (), None)
    record.window = (0, 5_000)
    payload = loads(JsonFormatter().format(record))
    assert payload["fields"] == {"window": "(0, 5000)"}
    assert payload["level"] == "WARNING"
