"""Centralized inspector configuration sourced from environment."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Mapping

from eventscope.core.resolver import MAX_TOLERANCE_MS, MIN_TOLERANCE_MS
from eventscope.core.stacking import DEFAULT_OVERLAP_THRESHOLD_MS
from eventscope.core.windows import (
    DEFAULT_AXIS_PADDING_MS,
    DEFAULT_AXIS_TICK_MS,
    DEFAULT_WINDOW_SIZE_S,
    MIN_WINDOW_SIZE_MS,
)
from eventscope.runtime.projection import (
    DEFAULT_PIXELS_PER_SECOND,
    MAX_PIXELS_PER_SECOND,
    MIN_PIXELS_PER_SECOND,
)

_LOG = logging.getLogger("eventscope.runtime")


@dataclass(frozen=True, slots=True)
class InspectorConfig:
    """Immutable engine and presentation configuration."""

    window_size_s: float = DEFAULT_WINDOW_SIZE_S
    overlap_threshold_ms: float = float(DEFAULT_OVERLAP_THRESHOLD_MS)
    hover_tolerance_ms: float = 500.0
    freeze_tolerance_ms: float = 1_000.0
    pixels_per_second: float = DEFAULT_PIXELS_PER_SECOND
    axis_padding_ms: int = DEFAULT_AXIS_PADDING_MS
    axis_tick_ms: int = DEFAULT_AXIS_TICK_MS
    log_level: str = "INFO"


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    maximum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
        if not math.isfinite(value):
            value = float(default)
    clamped = value
    if minimum is not None:
        clamped = max(float(minimum), clamped)
    if maximum is not None:
        clamped = min(float(maximum), clamped)
    if clamped != value:
        _LOG.warning("config_value_clamped name=%s requested=%s applied=%s", name, value, clamped)
    return clamped


def resolve_log_level_name(
    default: str = "INFO", *, env: Mapping[str, str] | None = None
) -> str:
    """Resolve log level with inspector-prefixed override."""
    value = _raw("EVENTSCOPE_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper() or default


def load_inspector_config(*, env: Mapping[str, str] | None = None) -> InspectorConfig:
    """Load immutable configuration, clamping every value into its valid range."""
    return InspectorConfig(
        window_size_s=_float(
            "EVENTSCOPE_WINDOW_SIZE_S",
            DEFAULT_WINDOW_SIZE_S,
            minimum=MIN_WINDOW_SIZE_MS / 1000.0,
            env=env,
        ),
        overlap_threshold_ms=_float(
            "EVENTSCOPE_OVERLAP_THRESHOLD_MS",
            DEFAULT_OVERLAP_THRESHOLD_MS,
            minimum=0.0,
            env=env,
        ),
        hover_tolerance_ms=_float(
            "EVENTSCOPE_HOVER_TOLERANCE_MS",
            500.0,
            minimum=MIN_TOLERANCE_MS,
            maximum=MAX_TOLERANCE_MS,
            env=env,
        ),
        freeze_tolerance_ms=_float(
            "EVENTSCOPE_FREEZE_TOLERANCE_MS",
            1_000.0,
            minimum=MIN_TOLERANCE_MS,
            maximum=MAX_TOLERANCE_MS,
            env=env,
        ),
        pixels_per_second=_float(
            "EVENTSCOPE_PIXELS_PER_SECOND",
            DEFAULT_PIXELS_PER_SECOND,
            minimum=MIN_PIXELS_PER_SECOND,
            maximum=MAX_PIXELS_PER_SECOND,
            env=env,
        ),
        axis_padding_ms=_int("EVENTSCOPE_AXIS_PADDING_MS", DEFAULT_AXIS_PADDING_MS, minimum=0, env=env),
        axis_tick_ms=_int("EVENTSCOPE_AXIS_TICK_MS", DEFAULT_AXIS_TICK_MS, minimum=1, env=env),
        log_level=resolve_log_level_name(env=env),
    )
