"""
AI vision collaborator — client, prompt and response parsing.
"""

from .client import (
    VisionClient,
    GeminiVisionClient,
    ExampleVisionClient,
    get_vision_client,
    classify_transport_error,
)
from .prompts import SHOT_ANALYSIS_PROMPT
from .response_parser import ParsedResponse, parse_ai_response

__all__ = [
    "VisionClient",
    "GeminiVisionClient",
    "ExampleVisionClient",
    "get_vision_client",
    "classify_transport_error",
    "SHOT_ANALYSIS_PROMPT",
    "ParsedResponse",
    "parse_ai_response",
]
