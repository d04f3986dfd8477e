"""Pydantic request/response schemas for the route playback API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RouteRequest(BaseModel):
    track: Any
    """Raw route payload as produced by the tracking backend."""


class SampleRequest(RouteRequest):
    fraction: float = 0.0


class PlaybackRequest(RouteRequest):
    rate: float = 1.0
    fps: float = Field(default=30.0, gt=0)
    max_frames: int = Field(default=600, ge=1, le=10_000)


class HealthResponse(BaseModel):
    status: str
    version: str


class SummaryResponse(BaseModel):
    total_distance_meters: float
    start_timestamp: str | None
    end_timestamp: str | None
    duration_seconds: float
    point_count: int
    distance_label: str
    duration_label: str
    start_label: str
    end_label: str
    summary_line: str


class SampleRecord(BaseModel):
    position: float
    progress: float
    longitude: float
    latitude: float
    course: float
    display_course: float | None = None
    speed: float
    speed_label: str
    timestamp: str | None


class SampleResponse(BaseModel):
    point_count: int
    sample: SampleRecord | None


class PlaybackResponse(BaseModel):
    point_count: int
    rate: float
    finished: bool
    frames: list[SampleRecord]
