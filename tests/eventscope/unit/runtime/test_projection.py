from __future__ import annotations

import pytest

from eventscope.runtime.projection import (
    DEFAULT_PIXELS_PER_SECOND,
    TimeScale,
    clamp_pixels_per_second,
)


def test_time_scale_round_trips_time_and_pixels() -> None:
    scale = TimeScale(origin_ms=10_000.0, pixels_per_second=40.0)

    assert scale.to_pixel(12_500.0) == pytest.approx(100.0)
    assert scale.to_time(100.0) == pytest.approx(12_500.0)
    assert scale.to_pixel(10_000.0) == 0.0


def test_time_scale_clamps_on_construction_and_replace() -> None:
    assert TimeScale(origin_ms=0.0, pixels_per_second=0.5).pixels_per_second == 10.0
    scale = TimeScale(origin_ms=0.0).with_pixels_per_second(10_000.0)
    assert scale.pixels_per_second == 1_000.0
    assert TimeScale(origin_ms=0.0).pixels_per_second == DEFAULT_PIXELS_PER_SECOND


def test_clamp_pixels_per_second_rejects_non_finite() -> None:
    assert clamp_pixels_per_second(float("nan")) == DEFAULT_PIXELS_PER_SECOND
    assert clamp_pixels_per_second(float("inf")) == DEFAULT_PIXELS_PER_SECOND
    assert clamp_pixels_per_second(120) == 120.0


def test_width_for_never_negative() -> None:
    scale = TimeScale(origin_ms=5_000.0, pixels_per_second=100.0)
    assert scale.width_for(15_000.0) == pytest.approx(1_000.0)
    assert scale.width_for(0.0) == 0.0
