"""Tests for TrackNormalizer: heading fill-in and polyline densification."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pytest

from route_playback.geo.geodesy import bearing_degrees, haversine_meters
from route_playback.geo.models import GeoPoint
from route_playback.track.models import TrackPoint
from route_playback.track.normalizer import TrackNormalizer

T0 = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)

# ---------------------------------------------------------------------------
# Test-data helpers
# ---------------------------------------------------------------------------


def _fix(lon: float, lat: float, secs: float | None = None, speed: float = 0.0,
         course: float | None = None) -> TrackPoint:
    ts = T0 + timedelta(seconds=secs) if secs is not None else None
    return TrackPoint(GeoPoint(lon, lat), timestamp=ts, speed=speed, course=course)


def _max_gap(points: list[TrackPoint]) -> float:
    return max(
        haversine_meters(a.coordinate, b.coordinate) for a, b in zip(points, points[1:])
    )


# ---------------------------------------------------------------------------
# Fixes
# ---------------------------------------------------------------------------


class TestNormalizePoints:
    def test_reported_courses_pass_through(self):
        fixes = [_fix(0, 0, 0, course=45.0), _fix(0, 0.001, 10, course=90.0)]
        out = TrackNormalizer().normalize_points(fixes)
        assert out == fixes

    def test_missing_course_filled_with_bearing_to_next(self):
        fixes = [_fix(0, 0, 0), _fix(0.001, 0, 10), _fix(0.001, 0.001, 20)]
        out = TrackNormalizer().normalize_points(fixes)
        assert out[0].course == pytest.approx(90.0, abs=1e-6)
        assert out[1].course == pytest.approx(0.0, abs=1e-6)

    def test_last_point_course_left_unset(self):
        fixes = [_fix(0, 0, 0), _fix(0, 0.001, 10)]
        out = TrackNormalizer().normalize_points(fixes)
        assert out[-1].course is None

    def test_duplicate_position_uses_next_distinct_point(self):
        fixes = [_fix(0, 0, 0), _fix(0, 0, 5), _fix(0.001, 0, 10)]
        out = TrackNormalizer().normalize_points(fixes)
        expected = bearing_degrees(GeoPoint(0, 0), GeoPoint(0.001, 0))
        assert out[0].course == pytest.approx(expected)
        assert out[1].course == pytest.approx(expected)

    def test_trailing_duplicates_keep_no_course(self):
        fixes = [_fix(1, 1, 0), _fix(1, 1, 5)]
        out = TrackNormalizer().normalize_points(fixes)
        assert out[0].course is None

    def test_non_finite_coordinates_dropped(self):
        fixes = [_fix(0, 0, 0), _fix(math.nan, 0, 5), _fix(0, math.inf, 6), _fix(0, 0.001, 10)]
        out = TrackNormalizer().normalize_points(fixes)
        assert len(out) == 2
        assert out[1].coordinate == GeoPoint(0, 0.001)

    def test_out_of_order_timestamps_sorted(self):
        fixes = [_fix(0, 0.002, 20), _fix(0, 0, 0), _fix(0, 0.001, 10)]
        out = TrackNormalizer().normalize_points(fixes)
        assert [p.timestamp for p in out] == sorted(p.timestamp for p in fixes)

    def test_partial_timestamps_keep_input_order(self):
        fixes = [_fix(0, 0.002, 20), _fix(0, 0, None), _fix(0, 0.001, 10)]
        out = TrackNormalizer().normalize_points(fixes)
        assert [p.coordinate for p in out] == [p.coordinate for p in fixes]

    def test_empty_input(self):
        assert TrackNormalizer().normalize_points([]) == []

    def test_input_not_mutated(self):
        fixes = [_fix(0, 0, 0), _fix(0, 0.001, 10)]
        TrackNormalizer().normalize_points(fixes)
        assert fixes[0].course is None


# ---------------------------------------------------------------------------
# Densification
# ---------------------------------------------------------------------------


class TestDensify:
    @pytest.mark.parametrize("step", [1.0, 5.0, 7.5, 40.0])
    def test_gaps_never_exceed_step(self, step):
        line = [GeoPoint(90.40, 23.80), GeoPoint(90.401, 23.8012), GeoPoint(90.4035, 23.8012),
                GeoPoint(90.4035, 23.799)]
        out = TrackNormalizer(step_meters=step).densify(line)
        assert _max_gap(out) <= step

    @pytest.mark.parametrize(
        "line, step",
        [
            ([GeoPoint(0.0, 80.0), GeoPoint(90.0, 80.0)], 1000.0),
            ([GeoPoint(10.0, 60.0), GeoPoint(10.3, 60.2)], 5.0),
            ([GeoPoint(-70.0, -55.0), GeoPoint(-60.0, -62.0)], 2000.0),
        ],
    )
    def test_long_high_latitude_segments_respect_step(self, line, step):
        out = TrackNormalizer(step_meters=step).densify(line)
        assert _max_gap(out) <= step
        assert out[0].coordinate == line[0]
        assert out[-1].coordinate == line[-1]

    def test_endpoints_preserved_exactly(self):
        line = [GeoPoint(-0.127758, 51.507351), GeoPoint(-0.1, 51.52)]
        out = TrackNormalizer(step_meters=5.0).densify(line)
        assert out[0].coordinate == line[0]
        assert out[-1].coordinate == line[-1]

    def test_original_vertices_kept(self):
        line = [GeoPoint(0, 0), GeoPoint(0, 0.001), GeoPoint(0.001, 0.001)]
        coords = [p.coordinate for p in TrackNormalizer(step_meters=10.0).densify(line)]
        for vertex in line:
            assert vertex in coords

    def test_short_segments_not_split(self):
        line = [GeoPoint(0, 0), GeoPoint(0, 0.00001), GeoPoint(0, 0.00002)]
        out = TrackNormalizer(step_meters=5.0).densify(line)
        assert [p.coordinate for p in out] == line

    def test_inserted_point_count(self):
        # ~111.2 m at a 10 m step → 12 chords → 11 synthetic points.
        out = TrackNormalizer(step_meters=10.0).densify([GeoPoint(0, 0), GeoPoint(0, 0.001)])
        assert len(out) == 13

    def test_points_carry_no_metadata(self):
        out = TrackNormalizer(step_meters=10.0).densify([GeoPoint(0, 0), GeoPoint(0, 0.001)])
        assert all(p.timestamp is None and p.speed == 0.0 and p.course is None for p in out)

    def test_non_finite_vertices_dropped(self):
        line = [GeoPoint(0, 0), GeoPoint(math.nan, 1), GeoPoint(0, 0.0001)]
        out = TrackNormalizer(step_meters=5.0).densify(line)
        assert out[0].coordinate == line[0]
        assert out[-1].coordinate == line[-1]
        assert all(p.coordinate.is_finite() for p in out)

    def test_empty_and_single(self):
        n = TrackNormalizer()
        assert n.densify([]) == []
        assert [p.coordinate for p in n.densify([GeoPoint(1, 2)])] == [GeoPoint(1, 2)]


@pytest.mark.parametrize("step", [0.0, -1.0, math.nan])
def test_invalid_step_raises(step):
    with pytest.raises(ValueError):
        TrackNormalizer(step_meters=step)
