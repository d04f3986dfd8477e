"""RouteService — load → summarize → replay pipeline behind the Web API."""

from __future__ import annotations

import logging
from typing import Any

from route_playback.playback.engine import PlaybackEngine
from route_playback.playback.models import PlaybackConfig, PlaybackSample
from route_playback.reporting.formatter import ReadoutFormatter
from route_playback.track.normalizer import TrackNormalizer
from route_playback.track.parser import load_track
from route_playback.web.schemas import SampleRecord, SummaryResponse

_logger = logging.getLogger(__name__)


class RouteService:
    """Stateless facade over parser, normalizer, engine and formatter.

    A fresh :class:`PlaybackEngine` is built for every request, so one service
    can be shared between requests.

    Parameters
    ----------
    normalizer:
        Track normalizer (controls the densification step).
    config:
        Playback pacing used by :meth:`simulate`.
    formatter:
        Readout formatter for labels.
    """

    def __init__(
        self,
        normalizer: TrackNormalizer | None = None,
        config: PlaybackConfig | None = None,
        formatter: ReadoutFormatter | None = None,
    ) -> None:
        self._normalizer = normalizer or TrackNormalizer()
        self._config = config or PlaybackConfig()
        self._fmt = formatter or ReadoutFormatter()

    def load(self, payload: Any) -> PlaybackEngine:
        """Parse and normalize *payload* into a freshly loaded engine.

        Raises
        ------
        TrackFormatError
            If the payload shape is not recognised.
        """
        engine = PlaybackEngine(self._config)
        summary = engine.load(load_track(payload, self._normalizer))
        _logger.info("Route loaded: %d points, %.1f m", summary.point_count,
                     summary.total_distance_meters)
        return engine

    def summarize(self, payload: Any) -> SummaryResponse:
        summary = self.load(payload).summary
        return SummaryResponse(
            **summary.to_dict(),
            distance_label=self._fmt.distance_label(summary),
            duration_label=self._fmt.duration_label(summary.duration_seconds),
            start_label=self._fmt.clock_label(summary.start_timestamp),
            end_label=self._fmt.clock_label(summary.end_timestamp),
            summary_line=self._fmt.summary_line(summary),
        )

    def sample(self, payload: Any, fraction: float) -> tuple[int, SampleRecord | None]:
        """Return ``(point_count, record)`` for the sample at *fraction*."""
        engine = self.load(payload)
        engine.seek(fraction)
        sample = engine.current_sample()
        if sample is None:
            return engine.summary.point_count, None
        return engine.summary.point_count, self._record(sample, engine.progress)

    def simulate(
        self,
        payload: Any,
        rate: float = 1.0,
        fps: float = 30.0,
        max_frames: int = 600,
    ) -> tuple[int, float, bool, list[SampleRecord]]:
        """Replay the track from the start with a fixed frame clock.

        Returns ``(point_count, rate, finished, frames)``; the first frame is
        the start of the track and *finished* tells whether the end was
        reached within *max_frames*.
        """
        engine = self.load(payload)
        engine.set_rate(rate)
        engine.play()

        frames: list[SampleRecord] = []
        dt = 1.0 / fps
        while len(frames) < max_frames:
            sample = engine.current_sample()
            if sample is None:
                break
            course = engine.display_course()
            frames.append(self._record(sample, engine.progress, course))
            if not engine.is_playing:
                break
            engine.tick(dt)

        count = engine.summary.point_count
        finished = count > 0 and engine.position >= engine.last_index
        return count, engine.rate, finished, frames

    def _record(
        self,
        sample: PlaybackSample,
        progress: float,
        display_course: float | None = None,
    ) -> SampleRecord:
        return SampleRecord(
            position=sample.position,
            progress=progress,
            longitude=sample.coordinate.longitude,
            latitude=sample.coordinate.latitude,
            course=sample.course,
            display_course=display_course,
            speed=sample.speed,
            speed_label=self._fmt.speed_label(sample.speed),
            timestamp=sample.timestamp.isoformat() if sample.timestamp else None,
        )
