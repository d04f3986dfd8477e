"""Track data structures: recorded fixes and per-route statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from route_playback.geo.models import GeoPoint


@dataclass(frozen=True)
class TrackPoint:
    """One sample along a route.

    Fixes fetched from the tracking backend carry a timestamp and usually a
    speed and course; points synthesized by densification carry none of them.
    """

    coordinate: GeoPoint
    """Position of the sample."""

    timestamp: datetime | None = None
    """Wall-clock time the fix was recorded (timezone-aware), if known."""

    speed: float = 0.0
    """Speed in the feed's native unit. Clamped to >= 0; 0 when unknown."""

    course: float | None = None
    """Compass heading in ``[0, 360)``, clockwise from north, if reported."""


@dataclass(frozen=True)
class RouteSummary:
    """Aggregate statistics of one loaded track.

    Computed once per load by
    :class:`~route_playback.track.summary.RouteSummaryCalculator`.
    """

    total_distance_meters: float
    start_timestamp: datetime | None
    end_timestamp: datetime | None
    duration_seconds: float
    point_count: int

    @property
    def total_distance_km(self) -> float:
        return self.total_distance_meters / 1000.0

    def to_dict(self) -> dict:
        """Return a JSON-serializable dict with ISO-8601 timestamps."""
        return {
            "total_distance_meters": self.total_distance_meters,
            "start_timestamp": _iso(self.start_timestamp),
            "end_timestamp": _iso(self.end_timestamp),
            "duration_seconds": self.duration_seconds,
            "point_count": self.point_count,
        }


def _iso(ts: datetime | None) -> str | None:
    return ts.isoformat() if ts is not None else None
