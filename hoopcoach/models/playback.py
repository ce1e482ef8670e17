"""
Playback data models — player position snapshot and the active overlay.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from hoopcoach.models.shots import Shot

__all__ = ["OverlayState", "PlaybackState", "ActiveShotSelection"]


class OverlayState(str, Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"


class PlaybackState(BaseModel):
    """Snapshot of the media player."""
    position_seconds: float = 0.0
    duration_seconds: float = 0.0
    is_playing: bool = False

    @property
    def progress(self) -> float:
        if self.duration_seconds <= 0:
            return 0.0
        return min(1.0, max(0.0, self.position_seconds / self.duration_seconds))


class ActiveShotSelection(BaseModel):
    """
    The shot under the playhead and whether its overlay is on screen.

    ``visible`` expires on its own dwell timer, so it can be False while
    ``current`` is still set.
    """
    current: Optional[Shot] = None
    visible: bool = False

    @property
    def state(self) -> OverlayState:
        return OverlayState.VISIBLE if self.visible else OverlayState.HIDDEN
