"""
Vision client — the one place that talks to the generative-AI service.

A client is built once at process start by :func:`get_vision_client` and
passed to whatever needs it; nothing here is a module-level singleton.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Optional

from hoopcoach.config import Settings, get_settings
from hoopcoach.engine.examples import EXAMPLE_RAW_SHOTS
from hoopcoach.errors import TransportError, TransportErrorKind

logger = logging.getLogger("hoopcoach.ai")


class VisionClient(ABC):
    """Abstract video-understanding client."""

    @abstractmethod
    async def analyze_video(self, video_bytes: bytes, prompt: str, mime_type: str = "video/mp4") -> str:
        """Send the video and prompt; return the model's raw text reply.

        Raises:
            TransportError: the service could not be reached or refused.
        """


class GeminiVisionClient(VisionClient):
    """Google Gemini client. The SDK model is created lazily on first use."""

    def __init__(self, api_key: str, model: str = "gemini-1.5-pro"):
        self.api_key = api_key
        self.model = model
        self._model = None

    def _get_model(self):
        if self._model is None:
            import google.generativeai as genai
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model)
        return self._model

    async def analyze_video(self, video_bytes: bytes, prompt: str, mime_type: str = "video/mp4") -> str:
        logger.info("Sending %.1f MB video to %s", len(video_bytes) / 1e6, self.model)
        try:
            response = await self._get_model().generate_content_async([
                prompt,
                {"mime_type": mime_type, "data": video_bytes},
            ])
            text = response.text or ""
        except Exception as exc:
            kind, message = classify_transport_error(exc)
            logger.error("Gemini request failed (%s): %s", kind.value, exc)
            raise TransportError(kind, message) from exc
        logger.info("Gemini response received (%d chars)", len(text))
        return text


class ExampleVisionClient(VisionClient):
    """Offline client that answers every request with the example feedback."""

    async def analyze_video(self, video_bytes: bytes, prompt: str, mime_type: str = "video/mp4") -> str:
        return json.dumps({"shots": EXAMPLE_RAW_SHOTS})


def get_vision_client(settings: Optional[Settings] = None, allow_fallback: bool = True) -> Optional[VisionClient]:
    """Build the vision client from settings.

    Falls back to :class:`ExampleVisionClient` when no API key is configured,
    or returns None when ``allow_fallback`` is False.
    """
    settings = settings or get_settings()
    if settings.GEMINI_API_KEY:
        return GeminiVisionClient(api_key=settings.GEMINI_API_KEY, model=settings.GEMINI_MODEL)
    if allow_fallback:
        logger.warning("GEMINI_API_KEY is not set. Using example feedback client.")
        return ExampleVisionClient()
    logger.info("GEMINI_API_KEY is not set. Vision client disabled.")
    return None


def classify_transport_error(exc: Exception) -> tuple[TransportErrorKind, str]:
    """Classify a service exception by the text it carries.

    Returns (kind, user_facing_message).
    """
    message = str(exc)
    lowered = message.lower()
    exc_type = type(exc).__name__

    if any(s in lowered for s in ["quota", "resource has been exhausted", "resource_exhausted", "billing"]):
        return (
            TransportErrorKind.QUOTA,
            "The AI service quota is used up. Showing example feedback instead.",
        )

    if any(s in lowered for s in ["rate limit", "rate_limit", "429", "too many requests"]):
        return (
            TransportErrorKind.RATE_LIMITED,
            "The AI service is rate limiting requests. Showing example feedback instead.",
        )

    if any(s in lowered for s in [
        "api key", "api_key", "unauthorized", "permission denied", "401", "403",
    ]):
        return (
            TransportErrorKind.AUTH_FAILED,
            f"The AI service rejected the API key. Check GEMINI_API_KEY. (Detail: {exc_type})",
        )

    if any(s in lowered for s in [
        "connection", "timeout", "timed out", "dns", "unreachable", "refused",
        "network", "500", "502", "503", "504", "server error", "internal error",
    ]) or exc_type in ("ConnectionError", "TimeoutError", "OSError"):
        return (
            TransportErrorKind.UNAVAILABLE,
            f"Could not reach the AI service. Check your connection and try again. (Detail: {exc_type})",
        )

    return (
        TransportErrorKind.UNAVAILABLE,
        f"AI service error: {exc_type}: {message[:200]}",
    )
