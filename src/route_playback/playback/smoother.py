"""Single-pole low-pass filter on compass headings."""

from __future__ import annotations

from route_playback.geo.geodesy import interpolate_bearing
from route_playback.playback.models import PlaybackState


class HeadingSmoother:
    """Exponential smoothing of the course fed to a marker or camera.

    Each reading moves the filtered heading *alpha* of the way towards the new
    target along the shorter arc, so the output never swings through 180°
    when the heading crosses north.  The filter memory lives in
    :attr:`PlaybackState.smoothed_course`.
    """

    def __init__(self, alpha: float = 0.15) -> None:
        if not (0 < alpha <= 1):
            raise ValueError("alpha must be in (0, 1]")
        self.alpha = alpha

    def update(self, state: PlaybackState, target: float) -> float:
        """Feed *target* into the filter and return the smoothed heading."""
        prior = state.smoothed_course
        nxt = target if prior is None else interpolate_bearing(prior, target, self.alpha)
        state.smoothed_course = nxt
        return nxt

    def reset(self, state: PlaybackState) -> None:
        state.smoothed_course = None
