"""
Request dependencies — settings and the vision client live on ``app.state``.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from hoopcoach.ai.client import VisionClient
from hoopcoach.config import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_client(request: Request) -> Optional[VisionClient]:
    return request.app.state.vision_client
