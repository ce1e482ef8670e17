"""
Shot routes — normalise raw records, parse model replies, encode for transport.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from hoopcoach.ai.response_parser import parse_ai_response
from hoopcoach.engine.normalizer import normalize_shots
from hoopcoach.engine.transport import decode_shots, encode_shots
from hoopcoach.models.shots import Shot

router = APIRouter()


class NormalizeRequest(BaseModel):
    shots: list[Any] = Field(default_factory=list)
    sort_chronologically: bool = False


class ParseRequest(BaseModel):
    text: str = ""


class EncodeRequest(BaseModel):
    shots: list[Shot] = Field(default_factory=list)


@router.post("/normalize")
async def normalize(body: NormalizeRequest):
    shots = normalize_shots(body.shots, sort_chronologically=body.sort_chronologically)
    return {"shots": [s.model_dump(mode="json") for s in shots], "total": len(shots)}


@router.post("/parse")
async def parse(body: ParseRequest):
    """Parse a raw model reply (JSON, fenced JSON or prose) into shots."""
    parsed = parse_ai_response(body.text)
    shots = normalize_shots(parsed.shots)
    return {
        "shots": [s.model_dump(mode="json") for s in shots],
        "total": len(shots),
        "method": parsed.method,
        "synthetic_timestamps": parsed.is_synthetic,
    }


@router.post("/encode")
async def encode(body: EncodeRequest):
    return {"payload": encode_shots(body.shots)}


@router.get("/decode")
async def decode(payload: str = ""):
    shots = decode_shots(payload)
    return {"shots": [s.model_dump(mode="json") for s in shots], "total": len(shots)}
