"""Shared test fixtures."""

import asyncio
import json

import pytest

from hoopcoach.ai.client import VisionClient
from hoopcoach.config import Settings
from hoopcoach.engine.normalizer import normalize_shots
from hoopcoach.errors import TransportError


class FakeVisionClient(VisionClient):
    """Scripted vision client: returns ``reply`` or raises ``error``."""

    def __init__(self, reply: str = "", error: Exception = None, delay: float = 0.0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls = []

    async def analyze_video(self, video_bytes, prompt, mime_type="video/mp4"):
        self.calls.append((len(video_bytes), mime_type))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings():
    """Settings with timers short enough for tests."""
    return Settings(
        GEMINI_API_KEY="",
        MATCH_TOLERANCE_SECONDS=2.0,
        OVERLAY_DWELL_SECONDS=0.2,
        SAMPLE_INTERVAL_SECONDS=0.01,
        SAMPLE_EPSILON_SECONDS=0.05,
        SKIP_SECONDS=10.0,
        PROGRESS_TICK_SECONDS=0.01,
    )


@pytest.fixture
def game_shots():
    """Three shots in chronological order: miss at 7.5s, make at 13s, made layup at 21.5s."""
    return normalize_shots([
        {"time": "0:07.5", "outcome": "miss", "shot_type": "Jump shot", "feedback": "Elbow in."},
        {"time": "0:13", "outcome": "make", "shot_type": "Three-pointer", "feedback": "Square up."},
        {"time": "0:21.5", "outcome": "make", "shot_type": "Layup", "feedback": "Drive the knee."},
    ])


@pytest.fixture
def shots_reply():
    return json.dumps({"shots": [
        {"time": "00:05", "outcome": "make", "feedback": "Good form"},
        {"time": "00:12", "outcome": "miss", "shot_type": "Three-pointer", "feedback": "Short arc"},
    ]})


@pytest.fixture
def fake_client_factory():
    return FakeVisionClient


@pytest.fixture
def transport_error():
    def _make(kind, message="boom"):
        return TransportError(kind, message)
    return _make
