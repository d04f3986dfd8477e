"""Geographic value types."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    """A WGS-84 position, approximated as a point on a sphere.

    Immutable; two points compare equal when both components are equal.
    """

    longitude: float
    """Longitude in decimal degrees."""

    latitude: float
    """Latitude in decimal degrees."""

    def is_finite(self) -> bool:
        """Return True if both components are finite (no NaN/Inf)."""
        return math.isfinite(self.longitude) and math.isfinite(self.latitude)

    def as_tuple(self) -> tuple[float, float]:
        """Return ``(longitude, latitude)``, the GeoJSON coordinate order."""
        return (self.longitude, self.latitude)
