"""FastAPI Web application — route summary, sampling and playback preview."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException

from route_playback.playback.models import PlaybackConfig
from route_playback.reporting.formatter import ReadoutFormatter
from route_playback.track.normalizer import TrackNormalizer
from route_playback.web.schemas import (
    HealthResponse,
    PlaybackRequest,
    PlaybackResponse,
    RouteRequest,
    SampleRequest,
    SampleResponse,
    SummaryResponse,
)
from route_playback.web.service import RouteService

load_dotenv()  # loads .env from project root; must run before env vars are consumed

_logger = logging.getLogger(__name__)

VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(title="Route Playback", version=VERSION)


def _service() -> RouteService:
    return RouteService(
        normalizer=TrackNormalizer(
            step_meters=float(os.environ.get("ROUTE_PLAYBACK_STEP_METERS", "5.0"))
        ),
        config=PlaybackConfig(
            base_points_per_second=float(
                os.environ.get("ROUTE_PLAYBACK_POINTS_PER_SECOND", "2.0")
            )
        ),
        formatter=ReadoutFormatter(
            speed_display_multiplier=float(
                os.environ.get("ROUTE_PLAYBACK_SPEED_MULTIPLIER", "1.0")
            )
        ),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=VERSION)


@app.post("/api/route/summary", response_model=SummaryResponse)
def route_summary(req: RouteRequest) -> SummaryResponse:
    """Distance, duration and readout labels for a route payload."""
    svc = _service()
    try:
        return svc.summarize(req.track)
    except ValueError as exc:
        _logger.warning("Rejected route payload: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        _logger.exception("Route request failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.post("/api/route/sample", response_model=SampleResponse)
def route_sample(req: SampleRequest) -> SampleResponse:
    """Interpolated sample at ``fraction`` of the route."""
    svc = _service()
    try:
        count, record = svc.sample(req.track, req.fraction)
    except ValueError as exc:
        _logger.warning("Rejected route payload: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        _logger.exception("Route request failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return SampleResponse(point_count=count, sample=record)


@app.post("/api/route/playback", response_model=PlaybackResponse)
def route_playback(req: PlaybackRequest) -> PlaybackResponse:
    """Simulated playback frames from the start of the route."""
    svc = _service()
    try:
        count, rate, finished, frames = svc.simulate(
            req.track, rate=req.rate, fps=req.fps, max_frames=req.max_frames
        )
    except ValueError as exc:
        _logger.warning("Rejected route payload: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        _logger.exception("Route request failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return PlaybackResponse(point_count=count, rate=rate, finished=finished, frames=frames)
