"""Distance and duration statistics of a normalized track."""

from __future__ import annotations

from route_playback.geo.geodesy import haversine_meters
from route_playback.track.models import RouteSummary, TrackPoint


class RouteSummaryCalculator:
    """Reduce a normalized track to a :class:`RouteSummary`.

    Tracks of length 0 or 1 yield zero distance and zero duration.
    """

    def compute(self, points: list[TrackPoint]) -> RouteSummary:
        """Return the summary of *points*."""
        distance = 0.0
        for prev, cur in zip(points, points[1:]):
            distance += haversine_meters(prev.coordinate, cur.coordinate)

        start = points[0].timestamp if points else None
        end = points[-1].timestamp if points else None
        duration = (end - start).total_seconds() if start is not None and end is not None else 0.0

        return RouteSummary(
            total_distance_meters=distance,
            start_timestamp=start,
            end_timestamp=end,
            duration_seconds=duration,
            point_count=len(points),
        )


def summarize(points: list[TrackPoint]) -> RouteSummary:
    """Shorthand for ``RouteSummaryCalculator().compute(points)``."""
    return RouteSummaryCalculator().compute(points)
