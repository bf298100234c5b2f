"""
Live refresh loop

Re-derives badges on a fixed interval so a live view can show running timers
and approaching deadlines. Every tick is a fresh, idempotent evaluation at the
clock's current instant; nothing is carried over between ticks.
"""

import asyncio
import inspect
from typing import Callable, List, Optional, Sequence
from task_engine.config.settings import settings
from task_engine.models.task import Task
from task_engine.models.report import TaskBadges
from task_engine.services.badges import build_all_badges
from task_engine.utils.date_utils import Clock
from task_engine.utils.logger import logger


def needs_refresh(task: Task) -> bool:
    """
    Tasks whose badges change with time alone

    Running timers, active tasks with a deadline, and active recurring tasks.
    """
    if task.is_running:
        return True
    if task.status.is_terminal:
        return False
    return task.deadline is not None or task.is_recurring


async def run_refresh_loop(
    tasks_provider: Callable[[], Sequence[Task]],
    clock: Clock,
    on_refresh: Callable[[List[TaskBadges]], object],
    *,
    interval_seconds: Optional[float] = None,
    max_ticks: Optional[int] = None,
) -> int:
    """
    Periodically recompute badges for time-sensitive tasks

    Every interval:
    - read the current task snapshots from tasks_provider
    - keep the ones whose badges depend on time
    - build their badges at clock.now() and pass them to on_refresh
      (a plain function or a coroutine function)

    Errors from the provider or callback are logged and the loop continues.
    To stop the loop, cancel the task or pass max_ticks.

    Args:
        tasks_provider: Returns the current task snapshots
        clock: Source of "now"
        on_refresh: Receives the list of badges
        interval_seconds: Delay between ticks (settings if omitted)
        max_ticks: Stop after this many ticks (run forever if omitted)

    Returns:
        Number of ticks run
    """
    if interval_seconds is None:
        interval_seconds = settings.refresh_interval()
    sleep_s = max(0.0, float(interval_seconds))

    ticks = 0
    while max_ticks is None or ticks < max_ticks:
        ticks += 1

        try:
            tasks = [t for t in tasks_provider() if needs_refresh(t)]
            badges = build_all_badges(tasks, clock.now())
            result = on_refresh(badges)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception(f"[LiveRefresh] Refresh tick {ticks} failed")

        if max_ticks is not None and ticks >= max_ticks:
            break
        await asyncio.sleep(sleep_s)

    return ticks
