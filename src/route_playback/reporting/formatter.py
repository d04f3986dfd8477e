"""Human-readable labels for route and playback values."""

from __future__ import annotations

import math
from datetime import datetime

from route_playback.track.models import RouteSummary

PLACEHOLDER = "—"


class ReadoutFormatter:
    """Format summaries and samples for UI readouts.

    Args:
        speed_display_multiplier: Factor applied to raw speeds before display.
            Use 1.0 when the feed reports km/h and 3.6 when it reports m/s.
        speed_unit: Unit suffix for :meth:`speed_label`.
    """

    def __init__(self, speed_display_multiplier: float = 1.0, speed_unit: str = "km/h") -> None:
        self.speed_display_multiplier = speed_display_multiplier
        self.speed_unit = speed_unit

    def distance_label(self, summary: RouteSummary) -> str:
        return f"{summary.total_distance_km:.1f} km"

    def duration_label(self, seconds: float) -> str:
        """``"1h 5m"`` for an hour or more, ``"38m"`` below, ``"—"`` if unknown."""
        if not math.isfinite(seconds) or seconds <= 0:
            return PLACEHOLDER
        total = int(seconds)
        if total >= 3600:
            return f"{total // 3600}h {(total % 3600) // 60}m"
        return f"{total // 60}m"

    def clock_label(self, timestamp: datetime | None) -> str:
        """12-hour wall-clock label such as ``"3:07 PM"``."""
        if timestamp is None:
            return PLACEHOLDER
        hour = timestamp.hour % 12 or 12
        suffix = "AM" if timestamp.hour < 12 else "PM"
        return f"{hour}:{timestamp.minute:02d} {suffix}"

    def display_speed(self, speed: float) -> float:
        """Raw speed → display units; negative/non-finite values show as 0."""
        value = max(0.0, speed) * self.speed_display_multiplier
        return value if math.isfinite(value) else 0.0

    def speed_label(self, speed: float) -> str:
        return f"{self.display_speed(speed):.1f} {self.speed_unit}"

    def rate_label(self, rate: float) -> str:
        return f"{rate:.1f}×"

    def summary_line(self, summary: RouteSummary) -> str:
        """One-line trip readout, e.g. ``"12.4 km · 38m"``."""
        return f"{self.distance_label(summary)} · {self.duration_label(summary.duration_seconds)}"
