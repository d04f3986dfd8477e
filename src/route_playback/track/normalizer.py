"""Track normalization: heading fill-in for fixes, densification for polylines.

Two input shapes are accepted:

* a list of :class:`TrackPoint` fixes (timestamps/speed/course already known),
  handled by :meth:`TrackNormalizer.normalize_points`;
* a bare polyline of :class:`GeoPoint`, handled by :meth:`TrackNormalizer.densify`,
  which inserts synthetic points so the playback engine can step through the
  line at a roughly constant spatial rate.

Neither method raises on bad data: non-finite coordinates are dropped and an
empty list comes back as an empty track.
"""

from __future__ import annotations

import dataclasses
import logging
import math

from route_playback.geo.geodesy import bearing_degrees, haversine_meters, interpolate_coordinate
from route_playback.geo.models import GeoPoint
from route_playback.track.models import TrackPoint

_logger = logging.getLogger(__name__)


def _is_time_ordered(points: list[TrackPoint]) -> bool:
    return all(a.timestamp <= b.timestamp for a, b in zip(points, points[1:]))


class TrackNormalizer:
    """Produce canonical, ordered tracks for playback.

    Args:
        step_meters: Maximum distance between consecutive points after
            densification.

    Raises:
        ValueError: If *step_meters* is not a positive finite number.
    """

    def __init__(self, step_meters: float = 5.0) -> None:
        if not math.isfinite(step_meters) or step_meters <= 0:
            raise ValueError("step_meters must be > 0")
        self.step_meters = step_meters

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def normalize_points(self, points: list[TrackPoint]) -> list[TrackPoint]:
        """Normalize a list of recorded fixes.

        Points with a non-finite coordinate are dropped.  If every point has a
        timestamp but they are out of order, the list is stably sorted by
        timestamp.  Any point without a course (except the last) gets the
        bearing towards the next point at a different position.

        Returns:
            A new list; the input is not modified.
        """
        valid = [p for p in points if p.coordinate.is_finite()]
        if len(valid) != len(points):
            _logger.warning("Dropped %d fix(es) with non-finite coordinates",
                            len(points) - len(valid))

        if valid and all(p.timestamp is not None for p in valid) and not _is_time_ordered(valid):
            _logger.warning("Fixes arrived out of time order; sorting %d fixes", len(valid))
            valid = sorted(valid, key=lambda p: p.timestamp)

        return self._fill_courses(valid)

    def densify(self, coordinates: list[GeoPoint]) -> list[TrackPoint]:
        """Convert a bare polyline into a dense track.

        Any segment longer than :attr:`step_meters` is split into equal
        lon/lat chords, as many as it takes for every chord to measure at
        most :attr:`step_meters` on the sphere.  The first and last
        coordinates are kept exactly; synthetic points have no timestamp,
        zero speed and no course.
        """
        coords = [c for c in coordinates if c.is_finite()]
        if len(coords) != len(coordinates):
            _logger.warning("Dropped %d polyline vertex(es) with non-finite coordinates",
                            len(coordinates) - len(coords))
        if len(coords) <= 1:
            return [TrackPoint(coordinate=c) for c in coords]

        dense: list[GeoPoint] = []
        for start, end in zip(coords, coords[1:]):
            dense.append(start)
            dist = haversine_meters(start, end)
            if dist <= self.step_meters:
                continue
            dense.extend(self._interior_points(start, end, dist))
        dense.append(coords[-1])

        _logger.debug("Densified polyline: %d -> %d points (step %.1f m)",
                      len(coords), len(dense), self.step_meters)
        return [TrackPoint(coordinate=c) for c in dense]

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _interior_points(self, start: GeoPoint, end: GeoPoint, dist: float) -> list[GeoPoint]:
        """Evenly spaced points strictly between *start* and *end*.

        A lon/lat chord can be longer than its share of the great-circle
        distance (long or high-latitude segments), so the chord count grows
        until the longest measured chord fits within the step.
        """
        steps = math.ceil(dist / self.step_meters)
        while True:
            path = [interpolate_coordinate(start, end, s / steps) for s in range(steps + 1)]
            longest = max(haversine_meters(a, b) for a, b in zip(path, path[1:]))
            if longest <= self.step_meters:
                return path[1:-1]
            steps = max(steps + 1, math.ceil(steps * longest / self.step_meters))

    def _fill_courses(self, points: list[TrackPoint]) -> list[TrackPoint]:
        n = len(points)
        result: list[TrackPoint] = []
        for i, pt in enumerate(points):
            if pt.course is not None or i == n - 1:
                result.append(pt)
                continue
            # Skip duplicate positions; their bearing is undefined.
            j = i + 1
            while j < n and points[j].coordinate == pt.coordinate:
                j += 1
            if j == n:
                result.append(pt)
                continue
            course = bearing_degrees(pt.coordinate, points[j].coordinate)
            result.append(dataclasses.replace(pt, course=course))
        return result
