"""
Shot data models — the canonical record every AI response is normalised into.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["ShotResult", "Shot", "DEFAULT_SHOT_TYPE"]

DEFAULT_SHOT_TYPE = "Jump shot"


class ShotResult(str, Enum):
    MADE = "made"
    MISSED = "missed"


class Shot(BaseModel):
    """One detected shot attempt, positioned on the video timeline."""
    model_config = ConfigDict(frozen=True)

    timestamp_seconds: float = Field(default=0.0, ge=0.0)
    result: ShotResult = ShotResult.MISSED
    shot_type: str = DEFAULT_SHOT_TYPE
    feedback: str = ""

    # ── Running tallies (recomputed by the normaliser) ───
    made_count_at_this_point: int = Field(default=0, ge=0)
    missed_count_at_this_point: int = Field(default=0, ge=0)
    layups_made_at_this_point: int = Field(default=0, ge=0)

    @property
    def is_made(self) -> bool:
        return self.result == ShotResult.MADE

    @property
    def is_layup(self) -> bool:
        return "layup" in self.shot_type.lower()

    @property
    def headline(self) -> str:
        return f"{self.result.value.upper()} – {self.shot_type}"

    def to_raw(self) -> dict:
        """Legacy wire shape, as the vision prompt asks for it, plus the exact time."""
        whole = int(self.timestamp_seconds // 60)
        rest = self.timestamp_seconds - whole * 60
        return {
            "timestamp_of_outcome": f"{whole}:{rest:04.1f}",
            "timestamp_seconds": self.timestamp_seconds,
            "result": self.result.value,
            "shot_type": self.shot_type,
            "feedback": self.feedback,
            "total_shots_made_so_far": self.made_count_at_this_point,
            "total_shots_missed_so_far": self.missed_count_at_this_point,
            "total_layups_made_so_far": self.layups_made_at_this_point,
        }
