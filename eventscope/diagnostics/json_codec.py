"""Fast JSON codec helpers for snapshot loading and report export paths."""

from __future__ import annotations

from typing import Any

import orjson


def dumps_bytes(
    payload: Any,
    *,
    pretty: bool = False,
    sort_keys: bool = False,
) -> bytes:
    """Serialize payload to UTF-8 JSON bytes."""
    # We control newline emission ourselves for line-oriented exports.
    options = 0
    if pretty:
        options |= orjson.OPT_INDENT_2
    if sort_keys:
        options |= orjson.OPT_SORT_KEYS
    return orjson.dumps(payload, default=_default, option=options)


def dumps_text(
    payload: Any,
    *,
    pretty: bool = False,
    sort_keys: bool = False,
) -> str:
    return dumps_bytes(payload, pretty=pretty, sort_keys=sort_keys).decode("utf-8")


def loads(raw: bytes | str) -> Any:
    """Parse one JSON document."""
    return orjson.loads(raw)


def loads_lines(raw: bytes | str, *, errors: list[int] | None = None) -> list[Any]:
    """Parse a JSON-lines document, skipping blank lines.

    Without ``errors`` the first undecodable line raises. With it, undecodable lines
    are dropped and their 1-based line numbers appended to ``errors``.
    """
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    out: list[Any] = []
    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            out.append(orjson.loads(line))
        except orjson.JSONDecodeError:
            if errors is None:
                raise
            errors.append(number)
    return out


def _default(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"unserializable value: {type(value).__name__}")


__all__ = ["dumps_bytes", "dumps_text", "loads", "loads_lines"]
