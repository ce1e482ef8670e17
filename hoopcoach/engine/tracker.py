"""
Playback Position Tracker — bounded-rate polling of the player clock.

Polling is the only source of position samples; the player's own update
events are not subscribed to, so samples cannot arrive twice or out of
order. Samples closer than ``epsilon`` to the last forwarded one are
dropped. The loop only runs while the player reports it is playing.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from hoopcoach.engine.cancellation import CancellationToken
from hoopcoach.engine.player import MediaPlayer

logger = logging.getLogger("hoopcoach.tracker")

SampleCallback = Callable[[float], None]


class PositionTracker:

    def __init__(
        self,
        player: MediaPlayer,
        on_sample: SampleCallback,
        interval: float = 0.1,
        epsilon: float = 0.05,
        token: Optional[CancellationToken] = None,
    ):
        self.player = player
        self.on_sample = on_sample
        self.interval = interval
        self.epsilon = epsilon
        self.token = token or CancellationToken()
        self._last_forwarded: Optional[float] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def last_forwarded(self) -> Optional[float]:
        return self._last_forwarded

    def poll_once(self) -> Optional[float]:
        """Read the player clock and forward it if it moved far enough."""
        if self.token.cancelled:
            return None
        position = max(0.0, float(self.player.current_time or 0.0))
        if self._last_forwarded is not None and abs(position - self._last_forwarded) < self.epsilon:
            return None
        self._last_forwarded = position
        self.on_sample(position)
        return position

    def reset(self, position: Optional[float] = None) -> None:
        """Re-anchor after an explicit seek so the next sample is compared to it."""
        self._last_forwarded = position

    def resume(self) -> None:
        """Start polling now; a no-op if already running or the player is paused."""
        if self.token.cancelled or self.running or not self.player.playing:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="position-tracker")

    def suspend(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def stop(self) -> None:
        self.token.cancel()
        self.suspend()

    async def _run(self) -> None:
        logger.debug("Position tracking started (interval=%.3fs)", self.interval)
        try:
            while self.player.playing and not self.token.cancelled:
                try:
                    self.poll_once()
                except Exception as e:
                    logger.error("Position sample handler failed: %s", e, exc_info=True)
                await asyncio.sleep(self.interval)
        finally:
            logger.debug("Position tracking stopped")
