"""
Status resolver for non-recurring tasks and the terminal-status transition
"""

import math
from datetime import datetime
from typing import Optional
from task_engine.config.constants import DUE_SOON_HORIZON_SECONDS, SECONDS_PER_DAY
from task_engine.models.task import Task, TaskStatus
from task_engine.models.report import DisplayStatus
from task_engine.services.timer import stop_timer
from task_engine.utils.date_utils import to_local, is_same_day
from task_engine.utils.error_handler import InvalidTransitionError
from task_engine.utils.logger import logger


def is_past_deadline(deadline: Optional[datetime], now: datetime) -> bool:
    """True if now is strictly after the deadline instant"""
    if deadline is None:
        return False
    return now > to_local(deadline, now)


def is_due_today(deadline: Optional[datetime], now: datetime) -> bool:
    """True if the deadline falls on today's calendar day"""
    if deadline is None:
        return False
    return is_same_day(deadline, now)


def is_due_soon(deadline: Optional[datetime], now: datetime) -> bool:
    """True if the deadline is within the next 24 hours and has not passed"""
    if deadline is None:
        return False
    remaining = (to_local(deadline, now) - now).total_seconds()
    return 0 < remaining <= DUE_SOON_HORIZON_SECONDS


def days_overdue(deadline: Optional[datetime], now: datetime) -> int:
    """
    Whole days a deadline is overdue, rounded up

    Returns:
        0 when there is no deadline or now <= deadline, otherwise at least 1
    """
    if deadline is None:
        return 0

    overdue_seconds = (now - to_local(deadline, now)).total_seconds()
    if overdue_seconds <= 0:
        return 0
    return max(1, math.ceil(overdue_seconds / SECONDS_PER_DAY))


def resolve_status(task: Task, now: datetime) -> DisplayStatus:
    """
    Effective display status of a task

    Terminal tasks keep their stored status. Active tasks derive theirs from the
    deadline, with precedence overdue > due today > due soon > on track. A stored
    legacy Late status always shows as overdue.

    Args:
        task: Task snapshot
        now: Current instant

    Returns:
        DisplayStatus
    """
    if task.status == TaskStatus.COMPLETED:
        return DisplayStatus.COMPLETED
    if task.status == TaskStatus.CANCELLED:
        return DisplayStatus.CANCELLED
    if task.status == TaskStatus.LATE:
        return DisplayStatus.OVERDUE

    if is_past_deadline(task.deadline, now):
        return DisplayStatus.OVERDUE
    if is_due_today(task.deadline, now):
        return DisplayStatus.DUE_TODAY
    if is_due_soon(task.deadline, now):
        return DisplayStatus.DUE_SOON
    return DisplayStatus.ON_TRACK


def is_standard_late(task: Task, now: datetime) -> bool:
    """
    Lateness of a non-recurring task as counted in reports

    A task without a deadline is never late, even with the legacy Late status.
    """
    if task.deadline is None:
        return False
    return task.status == TaskStatus.LATE or (
        task.status == TaskStatus.ACTIVE and is_past_deadline(task.deadline, now)
    )


def transition_status(task: Task, new_status: TaskStatus, now: datetime) -> Task:
    """
    Apply a status change as one snapshot replacement

    Entering Completed or Cancelled settles a running timer and clears the
    priority flag. Entering Completed stamps completedAt and, for a task with no
    deadline, sets the deadline to now so it leaves the backlog.

    Args:
        task: Task snapshot
        new_status: Target status (Active, Completed or Cancelled)
        now: Current instant

    Returns:
        Updated snapshot

    Raises:
        InvalidTransitionError: if the task is already terminal or the target is Late
    """
    if task.status.is_terminal:
        raise InvalidTransitionError(
            f"task is {task.status.value.lower()}; no further status changes", task_id=task.id
        )
    if new_status == TaskStatus.LATE:
        raise InvalidTransitionError("lateness is derived from the deadline", task_id=task.id)

    if not new_status.is_terminal:
        if new_status == task.status:
            return task
        return task.model_copy(update={"status": new_status})

    settled = stop_timer(task, now)
    updates = {
        "status": new_status,
        "is_priority": False,
        "completed_at": None,
    }
    if new_status == TaskStatus.COMPLETED:
        updates["completed_at"] = now
        if task.deadline is None:
            updates["deadline"] = now

    logger.info(f"[StatusResolver] Task {task.id}: {task.status.value} -> {new_status.value}")
    return settled.model_copy(update=updates)
