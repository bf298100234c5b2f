"""
Tests for the live refresh loop
"""

import logging
import pytest
from datetime import datetime, timedelta
from task_engine.models.task import TaskStatus
from task_engine.services.live_refresh import needs_refresh, run_refresh_loop


def test_needs_refresh(make_task, now):
    """Test only time-sensitive tasks are refreshed"""
    assert needs_refresh(make_task(timer_started_at=now)) is True
    assert needs_refresh(make_task(deadline=now)) is True
    assert needs_refresh(make_task(is_recurring=True, recurring_days=[1])) is True
    assert needs_refresh(make_task()) is False
    assert needs_refresh(make_task(deadline=now, status=TaskStatus.COMPLETED, completed_at=now)) is False


@pytest.mark.asyncio
async def test_loop_runs_max_ticks(make_task, clock):
    """Test each tick derives badges at the clock's instant"""
    task = make_task(elapsed_time_seconds=10, timer_started_at=clock.now())
    seen = []

    def on_refresh(badges):
        seen.append([b.elapsed_seconds for b in badges])
        clock.advance(seconds=1)

    ticks = await run_refresh_loop(lambda: [task, make_task()], clock, on_refresh, interval_seconds=0, max_ticks=3)

    assert ticks == 3
    assert seen == [[10], [11], [12]]


@pytest.mark.asyncio
async def test_loop_accepts_async_callback(make_task, clock):
    """Test coroutine callbacks are awaited"""
    received = []

    async def on_refresh(badges):
        received.append(len(badges))

    await run_refresh_loop(
        lambda: [make_task(deadline=datetime(2025, 1, 16))], clock, on_refresh, interval_seconds=0, max_ticks=2
    )

    assert received == [1, 1]


@pytest.mark.asyncio
async def test_loop_survives_callback_error(make_task, clock, caplog):
    """Test a failing tick is logged and the loop continues"""
    calls = {"n": 0}

    def on_refresh(badges):
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("view gone")

    with caplog.at_level(logging.ERROR, logger="task_engine"):
        ticks = await run_refresh_loop(lambda: [], clock, on_refresh, interval_seconds=0, max_ticks=2)

    assert ticks == 2
    assert calls["n"] == 2
    assert "Refresh tick 1 failed" in caplog.text


@pytest.mark.asyncio
async def test_loop_is_idempotent_per_instant(make_task, clock):
    """Test ticks at the same instant give identical badges"""
    task = make_task(deadline=clock.now() + timedelta(hours=3))
    results = []

    await run_refresh_loop(lambda: [task], clock, results.append, interval_seconds=0, max_ticks=2)

    assert results[0] == results[1]
