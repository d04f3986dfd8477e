"""RouteService — pipeline behind the Web API."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from route_playback.playback.models import PlaybackConfig
from route_playback.reporting.formatter import ReadoutFormatter
from route_playback.track.normalizer import TrackNormalizer
from route_playback.track.parser import TrackFormatError
from route_playback.web.service import RouteService

FIXES = [
    {"lon": 0.0, "lat": 0.0, "time": 0, "speed": 10},
    {"lon": 0.0, "lat": 0.001, "time": 10, "speed": 20},
    {"lon": 0.001, "lat": 0.001, "time": 20, "speed": 30},
]


def test_load_returns_engine_at_start():
    engine = RouteService().load(FIXES)
    assert engine.summary.point_count == 3
    assert engine.position == 0.0
    assert not engine.is_playing
    assert engine.points[0].course == pytest.approx(0.0, abs=1e-6)


def test_load_propagates_format_error():
    with pytest.raises(TrackFormatError):
        RouteService().load(12)


def test_custom_step_used_for_lines():
    svc = RouteService(normalizer=TrackNormalizer(step_meters=50.0))
    line = {"type": "LineString", "coordinates": [[0.0, 0.0], [0.0, 0.001]]}
    assert svc.load(line).summary.point_count == 4


def test_summary_uses_formatter():
    fmt = MagicMock(spec=ReadoutFormatter)
    fmt.distance_label.return_value = "D"
    fmt.duration_label.return_value = "T"
    fmt.clock_label.return_value = "C"
    fmt.summary_line.return_value = "D · T"
    resp = RouteService(formatter=fmt).summarize(FIXES)
    assert resp.summary_line == "D · T"
    assert resp.duration_seconds == 20.0
    fmt.duration_label.assert_called_once_with(20.0)


def test_simulate_respects_pace():
    svc = RouteService(config=PlaybackConfig(base_points_per_second=1.0))
    count, rate, finished, frames = svc.simulate(FIXES, rate=2.0, fps=4.0)
    # 2 points at 0.5 points per frame → 4 ticks, 5 frames.
    assert count == 3
    assert rate == 2.0
    assert finished
    assert len(frames) == 5
    assert [f.position for f in frames] == pytest.approx([0.0, 0.5, 1.0, 1.5, 2.0])


def test_simulate_smooths_heading():
    _, _, _, frames = RouteService().simulate(FIXES, fps=2.0)
    courses = [f.display_course for f in frames]
    assert courses[0] == pytest.approx(0.0, abs=1e-6)
    assert all(c is not None for c in courses)
    # Heading turns east at the corner; the smoothed value lags behind.
    assert 0.0 < courses[-1] < 90.0


def test_simulate_single_point():
    count, _, finished, frames = RouteService().simulate(FIXES[:1])
    assert count == 1
    assert finished
    assert len(frames) == 1
