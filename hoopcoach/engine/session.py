"""
Playback Session — wires the tracker, matcher and overlay for one video.

Usage:
    session = PlaybackSession(player, shots, settings)
    session.start()
    # ... user plays, taps the timeline, picks shots from the list
    session.close()

All mutations go through this object on the event loop, so the active
selection has exactly one owner. ``close`` cancels every timer the session
started; calls after that leave state untouched.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from hoopcoach.config import Settings, get_settings
from hoopcoach.engine.cancellation import CancellationToken
from hoopcoach.engine.matcher import TimelineMatcher, match_active
from hoopcoach.engine.overlay import OverlayPresenter
from hoopcoach.engine.player import MediaPlayer
from hoopcoach.engine.tracker import PositionTracker
from hoopcoach.models.playback import ActiveShotSelection, PlaybackState
from hoopcoach.models.shots import Shot

logger = logging.getLogger("hoopcoach.session")


class PlaybackSession:

    def __init__(
        self,
        player: MediaPlayer,
        shots: Sequence[Shot],
        settings: Optional[Settings] = None,
        on_selection: Optional[Callable[[ActiveShotSelection], None]] = None,
    ):
        settings = settings or get_settings()
        self.player = player
        self.shots: tuple[Shot, ...] = tuple(shots)
        self.tolerance = settings.MATCH_TOLERANCE_SECONDS
        self.skip_seconds = settings.SKIP_SECONDS
        self.token = CancellationToken()

        self.matcher = TimelineMatcher(self.shots, self.tolerance)
        self.overlay = OverlayPresenter(
            dwell_seconds=settings.OVERLAY_DWELL_SECONDS,
            on_change=on_selection,
            token=self.token,
        )
        self.tracker = PositionTracker(
            player,
            on_sample=self.handle_sample,
            interval=settings.SAMPLE_INTERVAL_SECONDS,
            epsilon=settings.SAMPLE_EPSILON_SECONDS,
            token=self.token,
        )
        self.position: float = float(player.current_time or 0.0)

    # ── State ────────────────────────────────────────────────────────────────

    @property
    def closed(self) -> bool:
        return self.token.cancelled

    @property
    def selection(self) -> ActiveShotSelection:
        return self.overlay.selection

    @property
    def playback(self) -> PlaybackState:
        return PlaybackState(
            position_seconds=self.position,
            duration_seconds=float(self.player.duration or 0.0),
            is_playing=bool(self.player.playing),
        )

    # ── Lifecycle ────────────────────────────────────────────────────────────

    def start(self) -> None:
        self.tracker.resume()

    def close(self) -> None:
        if self.closed:
            return
        self.tracker.stop()
        self.overlay.close()
        logger.info("Playback session closed")

    # ── Automatic matching ───────────────────────────────────────────────────

    def handle_sample(self, position: float) -> None:
        """Tracker callback: update the selection only when the match changes."""
        if self.closed:
            return
        self.position = position
        change = self.matcher.update(position)
        if not change.changed:
            return
        if change.shot is not None:
            logger.info("Shot active at %.1fs (shot time %.1fs)", position, change.shot.timestamp_seconds)
            self.overlay.show(change.shot)
        else:
            self.overlay.clear()

    # ── User actions ─────────────────────────────────────────────────────────

    def toggle_playback(self) -> bool:
        """Play or pause; polling follows the player state. Returns is_playing."""
        if self.closed:
            return False
        if self.player.playing:
            self.player.pause()
            self.tracker.suspend()
        else:
            self.player.play()
            self.tracker.resume()
        return bool(self.player.playing)

    def select_shot(self, shot: Shot) -> None:
        """Jump to a shot picked from the list and show its feedback immediately."""
        if self.closed:
            return
        self._seek(shot.timestamp_seconds)
        self.matcher.prime(shot)
        self.overlay.show(shot)

    def tap_timeline(self, fraction: float) -> Optional[Shot]:
        """Seek to a point on the timeline bar; show a nearby shot or clear."""
        if self.closed:
            return None
        fraction = max(0.0, min(1.0, fraction))
        target = fraction * float(self.player.duration or 0.0)
        self._seek(target)
        nearby = match_active(self.position, self.shots, self.tolerance)
        self.matcher.prime(nearby)
        if nearby is not None:
            self.overlay.show(nearby)
        else:
            self.overlay.clear()
        return nearby

    def skip(self, forward: bool = True) -> float:
        if self.closed:
            return self.position
        delta = self.skip_seconds if forward else -self.skip_seconds
        self._seek(self.position + delta)
        self.handle_sample(self.position)
        return self.position

    def _seek(self, seconds: float) -> None:
        duration = float(self.player.duration or 0.0)
        clamped = max(0.0, min(duration, seconds)) if duration > 0 else max(0.0, seconds)
        self.player.seek(clamped)
        self.position = clamped
        self.tracker.reset(clamped)
        logger.debug("Seek to %.2fs", clamped)
