"""
Elapsed-time accumulator and timer start/stop
"""

import math
from datetime import datetime
from task_engine.models.task import Task
from task_engine.utils.date_utils import to_local
from task_engine.utils.error_handler import InvalidTransitionError
from task_engine.utils.logger import logger


def calculate_elapsed(task: Task, now: datetime) -> int:
    """
    Total worked seconds including the running session, if any

    A start recorded after "now" (clock skew) contributes nothing.

    Args:
        task: Task snapshot
        now: Current instant

    Returns:
        Elapsed seconds
    """
    if task.timer_started_at is None:
        return task.elapsed_time_seconds

    started = to_local(task.timer_started_at, now)
    delta = math.floor((now - started).total_seconds())
    return task.elapsed_time_seconds + max(0, delta)


def start_timer(task: Task, now: datetime) -> Task:
    """
    Start the task's timer

    Args:
        task: Task snapshot
        now: Current instant

    Returns:
        Updated snapshot (the same snapshot if the timer is already running)

    Raises:
        InvalidTransitionError: if the task is completed or cancelled
    """
    if task.status.is_terminal:
        raise InvalidTransitionError(
            f"cannot start timer on a {task.status.value.lower()} task", task_id=task.id
        )

    if task.timer_started_at is not None:
        return task

    logger.debug(f"[Timer] Started task {task.id} at {now.isoformat()}")
    return task.model_copy(update={"timer_started_at": now})


def stop_timer(task: Task, now: datetime) -> Task:
    """
    Settle a running timer: fold the session into the base and clear the start

    Both fields are replaced in a single copy so readers never see one without the other.

    Args:
        task: Task snapshot
        now: Current instant

    Returns:
        Updated snapshot (the same snapshot if no timer is running)
    """
    if task.timer_started_at is None:
        return task

    total = calculate_elapsed(task, now)
    logger.debug(f"[Timer] Stopped task {task.id}, elapsed {task.elapsed_time_seconds}s -> {total}s")
    return task.model_copy(update={"elapsed_time_seconds": total, "timer_started_at": None})


def toggle_timer(task: Task, now: datetime) -> Task:
    """Stop a running timer, or start a stopped one"""
    if task.timer_started_at is not None:
        return stop_timer(task, now)
    return start_timer(task, now)
