"""
Analysis routes — upload a shooting video and get shot feedback back.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from hoopcoach.ai.client import VisionClient
from hoopcoach.api.deps import get_app_settings, get_client
from hoopcoach.config import Settings
from hoopcoach.engine.analysis import VideoAnalyzer, max_video_bytes, oversized_result
from hoopcoach.engine.examples import example_shots
from hoopcoach.engine.transport import encode_shots
from hoopcoach.models.analysis import AnalysisOutcome, AnalysisResult

logger = logging.getLogger("hoopcoach.api")

UPLOAD_CHUNK_BYTES = 1024 * 1024

router = APIRouter()


@router.post("/", response_model=AnalysisResult)
async def analyze_video(
    file: UploadFile = File(...),
    settings: Settings = Depends(get_app_settings),
    client: Optional[VisionClient] = Depends(get_client),
):
    """Run shot analysis on an uploaded video. Always returns a terminal outcome."""
    limit = max_video_bytes(settings)
    if file.size is not None and file.size > limit:
        logger.warning("Rejected upload %s (%d bytes)", file.filename, file.size)
        return oversized_result(settings)

    chunks = []
    received = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        received += len(chunk)
        if received > limit:
            logger.warning("Upload %s exceeded %d bytes", file.filename, limit)
            return oversized_result(settings)
        chunks.append(chunk)

    return await VideoAnalyzer(client, settings).analyze(b"".join(chunks))


@router.get("/example")
async def get_example():
    """Example feedback, as shown when the AI service is unavailable."""
    shots = example_shots()
    result = AnalysisResult(
        outcome=AnalysisOutcome.EXAMPLE_FALLBACK,
        shots=shots,
        is_example_data=True,
        message="Example feedback",
    )
    return {**result.model_dump(mode="json"), "payload": encode_shots(shots)}
