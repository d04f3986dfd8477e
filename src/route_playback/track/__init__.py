"""Track loading: payload parsing, normalization and route statistics.

Public API
----------
TrackPoint             - one recorded (or synthesized) sample
RouteSummary           - distance/duration statistics of a track
RawTrackParser         - fetch-layer payload → TrackPoint / GeoPoint lists
TrackNormalizer        - heading fill-in and polyline densification
RouteSummaryCalculator - normalized track → RouteSummary
load_track             - parse + normalize in one call
"""

from route_playback.track.models import RouteSummary, TrackPoint
from route_playback.track.normalizer import TrackNormalizer
from route_playback.track.parser import (
    RawTrackParser,
    TrackFormatError,
    is_bare_line,
    load_track,
    parse_timestamp,
)
from route_playback.track.summary import RouteSummaryCalculator, summarize

__all__ = [
    "RawTrackParser",
    "RouteSummary",
    "RouteSummaryCalculator",
    "TrackFormatError",
    "TrackNormalizer",
    "TrackPoint",
    "is_bare_line",
    "load_track",
    "parse_timestamp",
    "summarize",
]
