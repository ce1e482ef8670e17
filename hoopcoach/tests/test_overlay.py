"""Tests for overlay presentation state and the dwell timer."""

import asyncio

import pytest

from hoopcoach.engine.overlay import OverlayPresenter
from hoopcoach.models.playback import OverlayState
from hoopcoach.models.shots import Shot


def _shot(ts):
    return Shot(timestamp_seconds=ts)


class TestOverlayPresenter:

    @pytest.mark.asyncio
    async def test_starts_hidden(self):
        overlay = OverlayPresenter(dwell_seconds=0.2)
        assert overlay.state == OverlayState.HIDDEN
        assert overlay.selection.current is None

    @pytest.mark.asyncio
    async def test_show_makes_visible(self):
        overlay = OverlayPresenter(dwell_seconds=0.2)
        shot = _shot(5.0)
        overlay.show(shot)
        assert overlay.state == OverlayState.VISIBLE
        assert overlay.selection.current == shot
        overlay.close()

    @pytest.mark.asyncio
    async def test_dwell_expiry_hides_but_keeps_shot(self):
        overlay = OverlayPresenter(dwell_seconds=0.05)
        shot = _shot(5.0)
        overlay.show(shot)
        await asyncio.sleep(0.1)
        assert overlay.state == OverlayState.HIDDEN
        assert overlay.selection.current == shot

    @pytest.mark.asyncio
    async def test_clear_hides_immediately(self):
        overlay = OverlayPresenter(dwell_seconds=5.0)
        overlay.show(_shot(5.0))
        overlay.clear()
        assert overlay.state == OverlayState.HIDDEN
        assert overlay.selection.current is None

    @pytest.mark.asyncio
    async def test_new_shot_restarts_dwell(self):
        overlay = OverlayPresenter(dwell_seconds=0.2)
        overlay.show(_shot(5.0))
        await asyncio.sleep(0.12)
        second = _shot(9.0)
        overlay.show(second)
        await asyncio.sleep(0.12)
        # first dwell would have ended by now
        assert overlay.state == OverlayState.VISIBLE
        assert overlay.selection.current == second
        await asyncio.sleep(0.15)
        assert overlay.state == OverlayState.HIDDEN

    @pytest.mark.asyncio
    async def test_on_change_sees_each_transition(self):
        seen = []
        overlay = OverlayPresenter(dwell_seconds=0.05, on_change=seen.append)
        overlay.show(_shot(5.0))
        await asyncio.sleep(0.1)
        overlay.clear()
        assert [s.visible for s in seen] == [True, False, False]
        assert seen[-1].current is None

    @pytest.mark.asyncio
    async def test_clear_when_already_clear_is_silent(self):
        seen = []
        overlay = OverlayPresenter(on_change=seen.append)
        overlay.clear()
        assert seen == []

    @pytest.mark.asyncio
    async def test_close_cancels_timer_and_freezes_state(self):
        seen = []
        overlay = OverlayPresenter(dwell_seconds=0.05, on_change=seen.append)
        overlay.show(_shot(5.0))
        overlay.close()
        await asyncio.sleep(0.1)
        overlay.show(_shot(9.0))
        assert len(seen) == 1
        assert overlay.selection.current.timestamp_seconds == 5.0
