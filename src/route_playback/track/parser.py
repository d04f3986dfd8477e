"""RawTrackParser — converts fetch-layer route payloads to track points.

The tracking backend answers route queries in several shapes:

* a GeoJSON ``FeatureCollection`` of ``Point`` features whose properties hold
  ``timestamp``/``time``, ``speed`` and ``course``/``heading``;
* a plain JSON list of fix objects (``longitude``/``lon``/``lng``,
  ``latitude``/``lat`` plus the same metadata keys);
* a ``LineString`` geometry (bare, wrapped in a ``Feature``, or as the first
  feature of a ``FeatureCollection``), optionally with parallel ``speeds``,
  ``courses`` and ``timestamps`` arrays.

A line without any parallel arrays is a bare polyline and goes through
densification instead of fix normalization; :func:`load_track` picks the
right path.  Invalid values are silently replaced, unusable points dropped.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any

from route_playback.geo.geodesy import normalize_bearing
from route_playback.geo.models import GeoPoint
from route_playback.track.models import TrackPoint
from route_playback.track.normalizer import TrackNormalizer

_logger = logging.getLogger(__name__)

_LON_KEYS = ("longitude", "lon", "lng")
_LAT_KEYS = ("latitude", "lat")
_TIME_KEYS = ("timestamp", "time")
_COURSE_KEYS = ("course", "heading")
_LINE_ARRAYS = ("speeds", "courses", "timestamps")

# Epoch numbers at or above this are milliseconds (1e11 s is past year 5000).
_EPOCH_MS_THRESHOLD = 1e11


class TrackFormatError(ValueError):
    """Raised when a payload matches none of the known route shapes."""


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------


def _to_float(value: Any) -> float | None:
    """Return *value* as a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    return num if math.isfinite(num) else None


def _first(d: dict, keys: tuple[str, ...]) -> Any:
    for key in keys:
        if d.get(key) is not None:
            return d[key]
    return None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 string or an epoch number into an aware UTC datetime.

    Epoch numbers are milliseconds when their magnitude is at least 1e11,
    seconds otherwise.  Naive ISO strings are taken as UTC.  Returns None
    (with a warning) if *value* is present but unusable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = value / 1000.0 if abs(value) >= _EPOCH_MS_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            _logger.warning("Dropped unusable timestamp %r", value)
            return None
    elif isinstance(value, str):
        try:
            ts = datetime.fromisoformat(value.strip())
        except ValueError:
            _logger.warning("Dropped unusable timestamp %r", value)
            return None
    else:
        _logger.warning("Dropped unusable timestamp %r", value)
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _speed(value: Any) -> float:
    num = _to_float(value)
    return num if num is not None and num > 0 else 0.0


def _course(value: Any) -> float | None:
    num = _to_float(value)
    return normalize_bearing(num) if num is not None else None


def _coordinate(value: Any) -> GeoPoint | None:
    """``[lon, lat, ...]`` → :class:`GeoPoint`; None for anything non-numeric."""
    if not isinstance(value, (list, tuple)) or len(value) < 2:
        return None
    lon = _to_float(value[0])
    lat = _to_float(value[1])
    if lon is None or lat is None:
        return None
    return GeoPoint(longitude=lon, latitude=lat)


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _at(values: Any, idx: int) -> Any:
    if isinstance(values, (list, tuple)) and idx < len(values):
        return values[idx]
    return None


# ---------------------------------------------------------------------------
# Shape detection
# ---------------------------------------------------------------------------


def _line_geometry(payload: Any) -> dict | None:
    """Return the LineString-like dict carried by *payload*, if any.

    The returned dict holds ``coordinates`` and possibly the parallel arrays.
    """
    if not isinstance(payload, dict):
        return None
    kind = payload.get("type")
    if kind == "LineString":
        return payload
    if kind == "Feature":
        geometry = _as_dict(payload.get("geometry"))
        if geometry.get("type") == "LineString":
            merged = dict(_as_dict(payload.get("properties")))
            merged.update(geometry)
            return merged
    if kind == "FeatureCollection":
        features = _as_list(payload.get("features"))
        if features and isinstance(features[0], dict):
            geometry = _as_dict(features[0].get("geometry"))
            if geometry.get("type") == "LineString":
                return _line_geometry({**features[0], "type": "Feature"})
    return None


def is_bare_line(payload: Any) -> bool:
    """Return True if *payload* is a line geometry without per-point metadata."""
    line = _line_geometry(payload)
    if line is None:
        return False
    return not any(line.get(key) for key in _LINE_ARRAYS)


class RawTrackParser:
    """Parses route payloads into :class:`TrackPoint` / :class:`GeoPoint` lists."""

    def parse(self, payload: Any) -> list[TrackPoint]:
        """Return the fixes carried by *payload*, in payload order.

        Raises:
            TrackFormatError: If *payload* is not a recognised route shape.
        """
        line = _line_geometry(payload)
        if line is not None:
            points = self._parse_line_fixes(line)
        elif isinstance(payload, list):
            points = self._parse_fix_list(payload)
        elif isinstance(payload, dict) and payload.get("type") == "FeatureCollection":
            points = self._parse_point_features(_as_list(payload.get("features")))
        else:
            raise TrackFormatError(f"Unrecognised route payload: {type(payload).__name__}")

        _logger.debug("Parsed %d fix(es) from route payload", len(points))
        return points

    def parse_line(self, payload: Any) -> list[GeoPoint]:
        """Return the vertices of a line payload.

        Raises:
            TrackFormatError: If *payload* carries no LineString.
        """
        line = _line_geometry(payload)
        if line is None:
            raise TrackFormatError("Route payload carries no LineString geometry")
        coords = [_coordinate(c) for c in _as_list(line.get("coordinates"))]
        return [c for c in coords if c is not None]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _parse_line_fixes(self, line: dict) -> list[TrackPoint]:
        speeds = line.get("speeds")
        courses = line.get("courses")
        timestamps = line.get("timestamps")
        points: list[TrackPoint] = []
        for idx, raw in enumerate(_as_list(line.get("coordinates"))):
            coord = _coordinate(raw)
            if coord is None:
                continue
            points.append(TrackPoint(
                coordinate=coord,
                timestamp=parse_timestamp(_at(timestamps, idx)),
                speed=_speed(_at(speeds, idx)),
                course=_course(_at(courses, idx)),
            ))
        return points

    def _parse_fix_list(self, fixes: list) -> list[TrackPoint]:
        points: list[TrackPoint] = []
        for fix in fixes:
            if not isinstance(fix, dict):
                continue
            coord = _coordinate([_first(fix, _LON_KEYS), _first(fix, _LAT_KEYS)])
            if coord is None:
                continue
            points.append(self._make_point(coord, fix))
        return points

    def _parse_point_features(self, features: list) -> list[TrackPoint]:
        points: list[TrackPoint] = []
        for feature in features:
            if not isinstance(feature, dict):
                continue
            geometry = _as_dict(feature.get("geometry"))
            if geometry.get("type") != "Point":
                continue
            coord = _coordinate(geometry.get("coordinates"))
            if coord is None:
                continue
            points.append(self._make_point(coord, _as_dict(feature.get("properties"))))
        return points

    @staticmethod
    def _make_point(coord: GeoPoint, props: dict) -> TrackPoint:
        return TrackPoint(
            coordinate=coord,
            timestamp=parse_timestamp(_first(props, _TIME_KEYS)),
            speed=_speed(props.get("speed")),
            course=_course(_first(props, _COURSE_KEYS)),
        )


def load_track(
    payload: Any,
    normalizer: TrackNormalizer | None = None,
    parser: RawTrackParser | None = None,
) -> list[TrackPoint]:
    """Parse *payload* and normalize it into a playback-ready track.

    Bare polylines are densified; everything else goes through fix
    normalization (course fill-in).

    Raises:
        TrackFormatError: If *payload* is not a recognised route shape.
    """
    normalizer = normalizer or TrackNormalizer()
    parser = parser or RawTrackParser()
    if is_bare_line(payload):
        return normalizer.densify(parser.parse_line(payload))
    return normalizer.normalize_points(parser.parse(payload))
