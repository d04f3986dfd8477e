"""Playback data models: configuration, mutable state and derived samples."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from route_playback.geo.models import GeoPoint


@dataclass
class PlaybackConfig:
    """Pacing and filtering settings for a :class:`PlaybackEngine`.

    ``base_points_per_second`` sets how many track points the playhead
    crosses per wall-clock second at rate 1.0.
    """

    base_points_per_second: float = 2.0
    min_rate: float = 0.5
    max_rate: float = 3.0
    heading_alpha: float = 0.15

    def __post_init__(self) -> None:
        if not math.isfinite(self.base_points_per_second) or self.base_points_per_second <= 0:
            raise ValueError("base_points_per_second must be > 0")
        if not (0 < self.min_rate <= self.max_rate) or not math.isfinite(self.max_rate):
            raise ValueError("rates must satisfy 0 < min_rate <= max_rate")
        if not (0 < self.heading_alpha <= 1):
            raise ValueError("heading_alpha must be in (0, 1]")


@dataclass
class PlaybackState:
    """Mutable playhead state, owned by exactly one engine."""

    position: float = 0.0
    """Fractional index into the track, in ``[0, N-1]``."""

    playing: bool = False

    rate_multiplier: float = 1.0
    """Speed multiplier applied to ``base_points_per_second``."""

    smoothed_course: float | None = None
    """Heading-filter memory; None until the first reading after a reset."""


@dataclass(frozen=True)
class PlaybackSample:
    """Interpolated vehicle state at a playhead position."""

    coordinate: GeoPoint
    course: float
    """Always resolved: reported, interpolated, or geometric bearing."""

    speed: float
    timestamp: datetime | None
    """Timestamp of the nearest earlier recorded point (display only)."""

    position: float
    index: int
