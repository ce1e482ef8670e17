"""
Video Analysis — one shooting video in, one terminal ``AnalysisResult`` out.

Flow: read the video → send it to the vision client → parse the reply →
normalise shots. While the request is in flight a simulated progress ticker
reports 5% every half second, capped at 95%, until the call returns.

The analysis screen must never dead-end, so every path ends in a result:
real shots, example shots (quota / rate limit), "no shots detected", or a
failure that offers a retry. The only exception that escapes is
``AnalysisCancelled``, raised when the caller's token was cancelled.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional, Union

from hoopcoach.ai.client import ExampleVisionClient, VisionClient
from hoopcoach.ai.prompts import SHOT_ANALYSIS_PROMPT
from hoopcoach.ai.response_parser import parse_ai_response
from hoopcoach.config import Settings, get_settings
from hoopcoach.engine.cancellation import CancellationToken, TaskScope
from hoopcoach.engine.examples import example_shots
from hoopcoach.engine.normalizer import normalize_shots
from hoopcoach.errors import TransportError
from hoopcoach.models.analysis import AnalysisOutcome, AnalysisResult

logger = logging.getLogger("hoopcoach.analysis")

ProgressCallback = Callable[[int], None]
VideoSource = Union[bytes, str, Path]


def max_video_bytes(settings: Settings) -> int:
    return settings.MAX_VIDEO_SIZE_MB * 1024 * 1024


def oversized_result(settings: Settings) -> AnalysisResult:
    return AnalysisResult(
        outcome=AnalysisOutcome.FAILED,
        message=f"Video is larger than {settings.MAX_VIDEO_SIZE_MB} MB. Trim it and try again.",
    )


class VideoAnalyzer:
    """Runs a single analysis against an injected vision client."""

    def __init__(
        self,
        client: Optional[VisionClient],
        settings: Optional[Settings] = None,
        prompt: str = SHOT_ANALYSIS_PROMPT,
    ):
        self.client = client
        self.settings = settings or get_settings()
        self.prompt = prompt

    async def analyze(
        self,
        video: VideoSource,
        token: Optional[CancellationToken] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> AnalysisResult:
        token = token or CancellationToken()
        ticker = TaskScope()
        if on_progress is not None:
            ticker.spawn(self._tick(token, on_progress), name="analysis-progress")
        try:
            result = await self._run(video, token)
        finally:
            ticker.close()

        token.raise_if_cancelled()
        if on_progress is not None:
            on_progress(100)
        logger.info("Analysis finished: %s (%d shots)", result.outcome.value, len(result.shots))
        return result

    async def _run(self, video: VideoSource, token: CancellationToken) -> AnalysisResult:
        if self.client is None:
            return self._example_result("AI analysis is not configured. Showing example feedback.")

        try:
            video_bytes = await self._read(video)
        except OSError as e:
            logger.error("Could not read video: %s", e)
            return AnalysisResult(
                outcome=AnalysisOutcome.FAILED,
                message="Could not read the video file. Please try again.",
            )
        token.raise_if_cancelled()

        if len(video_bytes) > max_video_bytes(self.settings):
            return oversized_result(self.settings)

        try:
            text = await self.client.analyze_video(video_bytes, self.prompt, self.settings.VIDEO_MIME_TYPE)
        except TransportError as e:
            token.raise_if_cancelled()
            if e.kind.is_usage_limit and self.settings.USE_EXAMPLE_ON_QUOTA:
                logger.warning("Vision service limit hit (%s); using example feedback", e.kind.value)
                return self._example_result(e.message, error_kind=e.kind.value)
            return AnalysisResult(
                outcome=AnalysisOutcome.FAILED,
                message=e.message,
                error_kind=e.kind.value,
            )
        token.raise_if_cancelled()

        parsed = parse_ai_response(text)
        shots = normalize_shots(parsed.shots)
        if isinstance(self.client, ExampleVisionClient):
            return self._example_result("Showing example feedback.")
        if not shots:
            return AnalysisResult(
                outcome=AnalysisOutcome.NO_SHOTS_DETECTED,
                message="No shots detected in this video.",
                parse_method=parsed.method,
                raw_response=text,
            )
        return AnalysisResult(
            outcome=AnalysisOutcome.SHOTS_DETECTED,
            shots=shots,
            message=f"Found {len(shots)} shots.",
            parse_method=parsed.method,
            raw_response=text,
        )

    async def _read(self, video: VideoSource) -> bytes:
        if isinstance(video, bytes):
            return video
        return await asyncio.to_thread(Path(video).read_bytes)

    def _example_result(self, message: str, error_kind: Optional[str] = None) -> AnalysisResult:
        return AnalysisResult(
            outcome=AnalysisOutcome.EXAMPLE_FALLBACK,
            shots=example_shots(),
            is_example_data=True,
            message=message,
            error_kind=error_kind,
        )

    async def _tick(self, token: CancellationToken, on_progress: ProgressCallback) -> None:
        progress = 0
        while not token.cancelled:
            await asyncio.sleep(self.settings.PROGRESS_TICK_SECONDS)
            if token.cancelled:
                return
            progress = min(self.settings.PROGRESS_CAP, progress + self.settings.PROGRESS_STEP)
            on_progress(progress)
