"""Shared fixtures for web tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from route_playback.web.app import app


@pytest.fixture
def client():
    """FastAPI test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def two_fix_route() -> dict:
    """Two fixes 0.001° apart due north, 10 s apart."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [0.0, 0.0]},
                "properties": {"timestamp": "2026-03-01T08:00:00Z", "speed": 0, "course": 0},
            },
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [0.0, 0.001]},
                "properties": {"timestamp": "2026-03-01T08:00:10Z", "speed": 40, "course": 0},
            },
        ],
    }
