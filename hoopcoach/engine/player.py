"""
Media player seam — the only surface the timeline core reads from.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from hoopcoach.models.playback import PlaybackState


@runtime_checkable
class MediaPlayer(Protocol):
    """What the sync engine needs from a video player. It never owns playback."""

    @property
    def current_time(self) -> float: ...

    @property
    def duration(self) -> float: ...

    @property
    def playing(self) -> bool: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def seek(self, seconds: float) -> None: ...


class StaticPlayer:
    """
    In-memory player whose clock only moves when told to.

    Used by tests and headless callers; ``advance`` stands in
    for real playback.
    """

    def __init__(self, duration: float = 60.0, position: float = 0.0):
        self._duration = duration
        self._position = position
        self._playing = False

    @property
    def current_time(self) -> float:
        return self._position

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def playing(self) -> bool:
        return self._playing

    def play(self) -> None:
        self._playing = True

    def pause(self) -> None:
        self._playing = False

    def seek(self, seconds: float) -> None:
        self._position = max(0.0, min(self._duration, seconds))

    def advance(self, seconds: float) -> None:
        if self._playing:
            self.seek(self._position + seconds)

    def snapshot(self) -> PlaybackState:
        return PlaybackState(
            position_seconds=self._position,
            duration_seconds=self._duration,
            is_playing=self._playing,
        )
