"""PlaybackEngine — frame-driven, scrubbable replay of a normalized track.

The engine owns a fractional playhead over the index space of the track.  An
external frame clock calls :meth:`PlaybackEngine.tick` with the seconds
elapsed since the previous frame; UI controls call :meth:`play`,
:meth:`pause`, :meth:`seek` and :meth:`set_rate`.  None of these raise on
out-of-range input: values are clamped and degenerate tracks (0 or 1 points)
simply never play.

Not thread-safe.  All calls are expected from a single event loop.
"""

from __future__ import annotations

import logging
import math

from route_playback.geo.geodesy import bearing_degrees, interpolate_bearing, interpolate_coordinate
from route_playback.playback.models import PlaybackConfig, PlaybackSample, PlaybackState
from route_playback.playback.smoother import HeadingSmoother
from route_playback.track.models import RouteSummary, TrackPoint
from route_playback.track.summary import RouteSummaryCalculator

_logger = logging.getLogger(__name__)


def _clamp(value: float, lo: float, hi: float) -> float:
    """Return *value* clamped to [lo, hi]; NaN/Inf become *lo*."""
    if not math.isfinite(value):
        return lo
    return min(max(value, lo), hi)


class PlaybackEngine:
    """Replays one track at a time.

    Parameters
    ----------
    config:
        Pacing/filter settings; defaults to :class:`PlaybackConfig`.
    """

    def __init__(self, config: PlaybackConfig | None = None) -> None:
        self._cfg = config or PlaybackConfig()
        self._smoother = HeadingSmoother(self._cfg.heading_alpha)
        self._summary_calc = RouteSummaryCalculator()
        self._points: list[TrackPoint] = []
        self._summary: RouteSummary = self._summary_calc.compute([])
        self._state = PlaybackState()

    # ------------------------------------------------------------------
    # Track lifecycle
    # ------------------------------------------------------------------

    def load(self, points: list[TrackPoint]) -> RouteSummary:
        """Install a normalized track and reset playback to the start.

        The rate multiplier survives the reload; everything else is reset.
        Returns the summary of the new track.
        """
        self._points = list(points)
        self._summary = self._summary_calc.compute(self._points)
        self._state = PlaybackState(rate_multiplier=self._state.rate_multiplier)
        _logger.debug("Loaded track: %d points, %.1f m, %.0f s",
                      self._summary.point_count,
                      self._summary.total_distance_meters,
                      self._summary.duration_seconds)
        return self._summary

    def clear(self) -> None:
        """Discard the current track and all playback state."""
        self.load([])

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def config(self) -> PlaybackConfig:
        return self._cfg

    @property
    def points(self) -> list[TrackPoint]:
        return list(self._points)

    @property
    def summary(self) -> RouteSummary:
        return self._summary

    @property
    def position(self) -> float:
        return self._state.position

    @property
    def is_playing(self) -> bool:
        return self._state.playing

    @property
    def rate(self) -> float:
        return self._state.rate_multiplier

    @property
    def smoothed_course(self) -> float | None:
        return self._state.smoothed_course

    @property
    def last_index(self) -> int:
        """Index of the final point (0 for an empty track)."""
        return max(len(self._points) - 1, 0)

    @property
    def progress(self) -> float:
        """Playhead as a fraction of the track, in [0, 1]."""
        if not self._points:
            return 0.0
        return min(self._state.position / max(self.last_index, 1), 1.0)

    @property
    def rate_fraction(self) -> float:
        """Rate multiplier mapped onto [0, 1] for a speed slider."""
        lo, hi = self._cfg.min_rate, self._cfg.max_rate
        if hi == lo:
            return 0.0
        return min((self._state.rate_multiplier - lo) / (hi - lo), 1.0)

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------

    def play(self) -> None:
        """Start (or restart from the beginning, if at the end) playback."""
        if len(self._points) <= 1:
            return
        if self._state.position >= self.last_index:
            self._state.position = 0.0
        self._state.playing = True

    def pause(self) -> None:
        self._state.playing = False

    def toggle(self) -> None:
        """Play/pause button behaviour."""
        if self._state.playing:
            self.pause()
        else:
            self.play()

    def seek(self, fraction: float) -> None:
        """Jump to *fraction* of the track (clamped to [0, 1]).

        Does not change the playing flag.
        """
        self._state.position = _clamp(fraction, 0.0, 1.0) * self.last_index

    def set_rate(self, multiplier: float) -> None:
        """Set the rate multiplier, clamped to the configured range.

        Non-finite values are ignored.
        """
        if not math.isfinite(multiplier):
            return
        self._state.rate_multiplier = _clamp(multiplier, self._cfg.min_rate, self._cfg.max_rate)

    def set_rate_fraction(self, ratio: float) -> None:
        """Set the rate from a slider position in [0, 1], snapped to 0.1 steps."""
        lo, hi = self._cfg.min_rate, self._cfg.max_rate
        self.set_rate(round(lo + _clamp(ratio, 0.0, 1.0) * (hi - lo), 1))

    def tick(self, delta_seconds: float) -> None:
        """Advance the playhead by *delta_seconds* of wall-clock time.

        Only effective while playing.  Reaching the final point stops
        playback; there is no looping.
        """
        if not self._state.playing:
            return
        if not math.isfinite(delta_seconds) or delta_seconds <= 0:
            return
        increment = delta_seconds * self._cfg.base_points_per_second * self._state.rate_multiplier
        nxt = min(self._state.position + increment, float(self.last_index))
        self._state.position = nxt
        if nxt >= self.last_index:
            self._state.playing = False
            _logger.debug("Reached end of track at index %d", self.last_index)

    # ------------------------------------------------------------------
    # Derived samples
    # ------------------------------------------------------------------

    def sample_at(self, position: float) -> PlaybackSample | None:
        """Interpolated position/course/speed at *position*.

        Returns None for an empty track.  Does not touch playback state.
        """
        if not self._points:
            return None
        position = _clamp(position, 0.0, float(self.last_index))
        index = min(math.floor(position), self.last_index)
        next_index = min(index + 1, self.last_index)
        t = _clamp(position - index, 0.0, 1.0)

        a = self._points[index]
        b = self._points[next_index]
        if index == next_index and a.course is None and index > 0:
            # Final point without a reported course keeps the last heading.
            course = self._course_between(self._points[index - 1], a, 1.0)
        else:
            course = self._course_between(a, b, t)
        return PlaybackSample(
            coordinate=interpolate_coordinate(a.coordinate, b.coordinate, t),
            course=course,
            speed=a.speed + (b.speed - a.speed) * t,
            timestamp=a.timestamp,
            position=position,
            index=index,
        )

    def current_sample(self) -> PlaybackSample | None:
        """:meth:`sample_at` the current playhead."""
        return self.sample_at(self._state.position)

    def display_course(self) -> float:
        """Smoothed heading for the current playhead (updates filter memory).

        Call once per rendered frame.  Returns 0 for an empty track.
        """
        sample = self.current_sample()
        if sample is None:
            return 0.0
        return self._smoother.update(self._state, sample.course)

    @staticmethod
    def _course_between(a: TrackPoint, b: TrackPoint, t: float) -> float:
        if a is b or a.coordinate == b.coordinate:
            if a.course is not None:
                return a.course
            return b.course if b.course is not None else 0.0
        if a.course is not None and b.course is not None:
            return interpolate_bearing(a.course, b.course, t)
        if a.course is not None:
            return a.course
        if b.course is not None:
            return b.course
        return bearing_degrees(a.coordinate, b.coordinate)
