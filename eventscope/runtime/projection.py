"""Time-to-pixel projection for the presentation layer."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

DEFAULT_PIXELS_PER_SECOND = 40.0
MIN_PIXELS_PER_SECOND = 10.0
MAX_PIXELS_PER_SECOND = 1_000.0


def clamp_pixels_per_second(value: float) -> float:
    scale = float(value)
    if not math.isfinite(scale):
        return DEFAULT_PIXELS_PER_SECOND
    return min(MAX_PIXELS_PER_SECOND, max(MIN_PIXELS_PER_SECOND, scale))


@dataclass(frozen=True, slots=True)
class TimeScale:
    """Linear mapping between epoch milliseconds and pixels from ``origin_ms``."""

    origin_ms: float
    pixels_per_second: float = DEFAULT_PIXELS_PER_SECOND

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixels_per_second", clamp_pixels_per_second(self.pixels_per_second))

    def to_pixel(self, timestamp_ms: float) -> float:
        return (timestamp_ms - self.origin_ms) / 1000.0 * self.pixels_per_second

    def to_time(self, x: float) -> float:
        return self.origin_ms + x * 1000.0 / self.pixels_per_second

    def with_pixels_per_second(self, pixels_per_second: float) -> "TimeScale":
        return replace(self, pixels_per_second=pixels_per_second)

    def width_for(self, end_ms: float) -> float:
        return max(0.0, self.to_pixel(end_ms))
