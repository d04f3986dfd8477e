"""Replay a recorded route from a JSON payload file and print readouts.

Usage:
  uv run python scripts/replay_route.py route.json \\
      --rate 1.5 \\
      --fps 30 \\
      --every 15

The payload may be any shape the tracking backend returns for a route query
(GeoJSON point features, a list of fixes, or a LineString with optional
speeds/courses/timestamps arrays).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from route_playback.playback.engine import PlaybackEngine
from route_playback.playback.models import PlaybackConfig
from route_playback.reporting.formatter import ReadoutFormatter
from route_playback.track.normalizer import TrackNormalizer
from route_playback.track.parser import TrackFormatError, load_track


def main() -> None:
    ap = argparse.ArgumentParser(description="Replay a recorded vehicle route")
    ap.add_argument("path", help="JSON route payload file")
    ap.add_argument("--rate", type=float, default=1.0, help="Playback rate multiplier (0.5-3.0)")
    ap.add_argument("--fps", type=float, default=30.0, help="Simulated frame rate")
    ap.add_argument("--every", type=int, default=15, help="Print a readout every N frames")
    ap.add_argument(
        "--points-per-second",
        type=float,
        default=2.0,
        help="Track points crossed per second at rate 1.0",
    )
    ap.add_argument("--step-m", type=float, default=5.0, help="Densification step for bare lines")
    ap.add_argument(
        "--speed-multiplier",
        type=float,
        default=1.0,
        help="Display multiplier for speeds (3.6 if the feed reports m/s)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    payload = json.loads(Path(args.path).read_text(encoding="utf-8"))
    try:
        points = load_track(payload, TrackNormalizer(step_meters=args.step_m))
    except TrackFormatError as exc:
        print(f"  [!] {exc}", file=sys.stderr)
        sys.exit(1)

    fmt = ReadoutFormatter(speed_display_multiplier=args.speed_multiplier)
    engine = PlaybackEngine(PlaybackConfig(base_points_per_second=args.points_per_second))
    summary = engine.load(points)

    print(f"Points    : {summary.point_count}")
    print(f"Trip      : {fmt.summary_line(summary)}")
    print(f"Window    : {fmt.clock_label(summary.start_timestamp)} – "
          f"{fmt.clock_label(summary.end_timestamp)}")
    print()

    if summary.point_count <= 1:
        print("  [!] Not enough points for playback.", file=sys.stderr)
        sys.exit(1)

    engine.set_rate(args.rate)
    engine.play()
    print(f"Playing at {fmt.rate_label(engine.rate)}")

    dt = 1.0 / args.fps
    frame = 0
    while True:
        sample = engine.current_sample()
        course = engine.display_course()
        if frame % args.every == 0 or not engine.is_playing:
            print(
                f"  {engine.progress * 100:5.1f}%  "
                f"{fmt.clock_label(sample.timestamp):>8}  "
                f"({sample.coordinate.longitude:.6f}, {sample.coordinate.latitude:.6f})  "
                f"{course:5.1f}°  {fmt.speed_label(sample.speed)}"
            )
        if not engine.is_playing:
            break
        engine.tick(dt)
        frame += 1

    print()
    print(f"Done after {frame} frames ({frame * dt:.1f} s wall clock).")


if __name__ == "__main__":
    main()
