"""Tests for cancellation tokens and task scopes."""

import asyncio

import pytest

from hoopcoach.engine.cancellation import CancellationToken, TaskScope
from hoopcoach.errors import AnalysisCancelled


class TestCancellationToken:

    def test_starts_live(self):
        token = CancellationToken()
        assert token.cancelled is False
        token.raise_if_cancelled()

    def test_cancel_is_sticky(self):
        token = CancellationToken()
        token.cancel()
        token.cancel()
        assert token.cancelled is True
        with pytest.raises(AnalysisCancelled):
            token.raise_if_cancelled()


class TestTaskScope:

    @pytest.mark.asyncio
    async def test_close_cancels_pending_tasks(self):
        scope = TaskScope()
        task = scope.spawn(asyncio.sleep(10), name="sleeper")
        await asyncio.sleep(0)
        scope.close()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert scope.closed is True

    @pytest.mark.asyncio
    async def test_close_cancels_shared_token(self):
        token = CancellationToken()
        scope = TaskScope(token)
        scope.close()
        assert token.cancelled is True

    @pytest.mark.asyncio
    async def test_spawn_after_close_raises(self):
        scope = TaskScope()
        scope.close()
        with pytest.raises(AnalysisCancelled):
            scope.spawn(asyncio.sleep(0))

    @pytest.mark.asyncio
    async def test_aclose_waits_for_tasks(self):
        scope = TaskScope()
        task = scope.spawn(asyncio.sleep(10))
        await asyncio.sleep(0)
        await scope.aclose()
        assert task.done()
        assert task.cancelled()

    @pytest.mark.asyncio
    async def test_finished_tasks_are_forgotten(self):
        scope = TaskScope()
        task = scope.spawn(asyncio.sleep(0))
        await task
        await asyncio.sleep(0)
        assert not scope._tasks
