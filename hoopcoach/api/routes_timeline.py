"""
Timeline routes — which shot is active at a playback position.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from hoopcoach.api.deps import get_app_settings
from hoopcoach.config import Settings
from hoopcoach.engine.matcher import match_active, shots_near
from hoopcoach.engine.timestamps import format_timestamp
from hoopcoach.models.shots import Shot

router = APIRouter()


class MatchRequest(BaseModel):
    position_seconds: float = Field(ge=0.0)
    shots: list[Shot] = Field(default_factory=list)
    tolerance: Optional[float] = Field(default=None, gt=0.0)


@router.post("/match")
async def match(body: MatchRequest, settings: Settings = Depends(get_app_settings)):
    tolerance = body.tolerance or settings.MATCH_TOLERANCE_SECONDS
    active = match_active(body.position_seconds, body.shots, tolerance)
    return {
        "position": format_timestamp(body.position_seconds),
        "tolerance": tolerance,
        "active": active.model_dump(mode="json") if active else None,
        "nearby": len(shots_near(body.position_seconds, body.shots, tolerance)),
    }
