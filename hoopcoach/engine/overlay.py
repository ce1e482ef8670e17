"""
Overlay Presentation State — the feedback card and its auto-dismiss timer.

hidden → visible when a new shot becomes active (proximity or user pick).
visible → hidden after the dwell elapses, or at once when nothing matches.
A new shot while visible restarts the dwell. The dwell is wall-clock time on
the event loop and does not care whether the playhead is still near the shot.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from hoopcoach.engine.cancellation import CancellationToken
from hoopcoach.models.playback import ActiveShotSelection, OverlayState
from hoopcoach.models.shots import Shot

logger = logging.getLogger("hoopcoach.overlay")

SelectionCallback = Callable[[ActiveShotSelection], None]


class OverlayPresenter:

    def __init__(
        self,
        dwell_seconds: float = 5.0,
        on_change: Optional[SelectionCallback] = None,
        token: Optional[CancellationToken] = None,
    ):
        self.dwell_seconds = dwell_seconds
        self.on_change = on_change
        self.token = token or CancellationToken()
        self._selection = ActiveShotSelection()
        self._timer: Optional[asyncio.TimerHandle] = None

    @property
    def selection(self) -> ActiveShotSelection:
        return self._selection

    @property
    def state(self) -> OverlayState:
        return self._selection.state

    def show(self, shot: Shot) -> None:
        """Make ``shot`` the visible overlay and (re)start the dwell timer."""
        if self.token.cancelled:
            return
        self._cancel_timer()
        self._timer = asyncio.get_running_loop().call_later(self.dwell_seconds, self._expire)
        logger.debug("Overlay shown for shot at %.1fs", shot.timestamp_seconds)
        self._set(ActiveShotSelection(current=shot, visible=True))

    def clear(self) -> None:
        """Nothing is active any more: drop the shot and hide immediately."""
        if self.token.cancelled:
            return
        self._cancel_timer()
        if self._selection.current is None and not self._selection.visible:
            return
        self._set(ActiveShotSelection())

    def close(self) -> None:
        self.token.cancel()
        self._cancel_timer()

    def _expire(self) -> None:
        self._timer = None
        if self.token.cancelled:
            return
        logger.debug("Overlay dwell elapsed")
        self._set(ActiveShotSelection(current=self._selection.current, visible=False))

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _set(self, selection: ActiveShotSelection) -> None:
        self._selection = selection
        if self.on_change is not None:
            self.on_change(selection)
