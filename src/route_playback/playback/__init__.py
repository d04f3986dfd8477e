"""Frame-driven route playback.

Public API
----------
PlaybackEngine  - playhead, control surface and sample derivation
PlaybackConfig  - pacing and filter settings
PlaybackState   - mutable playhead state owned by one engine
PlaybackSample  - interpolated position/course/speed at a playhead
HeadingSmoother - low-pass filter for displayed headings
"""

from route_playback.playback.engine import PlaybackEngine
from route_playback.playback.models import PlaybackConfig, PlaybackSample, PlaybackState
from route_playback.playback.smoother import HeadingSmoother

__all__ = [
    "HeadingSmoother",
    "PlaybackConfig",
    "PlaybackEngine",
    "PlaybackSample",
    "PlaybackState",
]
