"""Human-readable readouts for routes and playback."""

from route_playback.reporting.formatter import PLACEHOLDER, ReadoutFormatter

__all__ = ["PLACEHOLDER", "ReadoutFormatter"]
