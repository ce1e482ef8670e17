"""
Analysis result models — terminal outcomes of a video analysis run.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from hoopcoach.models.shots import Shot

__all__ = ["AnalysisOutcome", "AnalysisResult"]


class AnalysisOutcome(str, Enum):
    SHOTS_DETECTED = "shots_detected"
    NO_SHOTS_DETECTED = "no_shots_detected"
    EXAMPLE_FALLBACK = "example_fallback"
    FAILED = "failed"


class AnalysisResult(BaseModel):
    """What the analysis screen ends on. Never an open-ended loading state."""
    outcome: AnalysisOutcome
    shots: list[Shot] = Field(default_factory=list)
    is_example_data: bool = False
    message: str = ""
    error_kind: Optional[str] = None
    parse_method: Optional[str] = None
    raw_response: Optional[str] = None

    @property
    def can_view_results(self) -> bool:
        return bool(self.shots)

    @property
    def can_retry(self) -> bool:
        return self.outcome in (AnalysisOutcome.FAILED, AnalysisOutcome.NO_SHOTS_DETECTED)

    @property
    def banner(self) -> str:
        if self.outcome == AnalysisOutcome.EXAMPLE_FALLBACK:
            return "Using example feedback"
        if self.outcome == AnalysisOutcome.NO_SHOTS_DETECTED:
            return "No shots detected in this video. Try recording a video with clearer shots."
        if self.outcome == AnalysisOutcome.FAILED:
            return "Failed to analyze video. Please try again."
        return f"Found {len(self.shots)} shots in your video."
