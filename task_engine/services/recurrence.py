"""
Recurrence evaluator

A recurring task has a single completion slot (lastRecurringCompletion): marking
a different day done overwrites it. Per-day completion history is not tracked,
so backfilling several past days is unsupported.
"""

from datetime import datetime, date
from typing import List
from task_engine.config.constants import WEEKDAY_INDICES
from task_engine.models.task import Task
from task_engine.models.report import RoutineProgress
from task_engine.services.suspension import is_suspended
from task_engine.utils.date_utils import local_date, weekday_index, parse_hhmm
from task_engine.utils.error_handler import ValidationError
from task_engine.utils.logger import logger


def scheduled_on(task: Task, day: date) -> bool:
    """True if the day's weekday (Sunday = 0) is in the task's recurring days"""
    if not task.is_recurring:
        return False
    return weekday_index(day) in task.recurring_days


def done_on(task: Task, day: date, now: datetime) -> bool:
    """
    True if the task's last occurrence completion falls on the given calendar day

    Args:
        task: Task snapshot
        day: Calendar day to check
        now: Current instant (defines the local zone)
    """
    if task.last_recurring_completion is None:
        return False
    return local_date(task.last_recurring_completion, now) == day


def cutoff_passed(recurring_time: str, now: datetime) -> bool:
    """
    True if the current time of day is strictly after the "HH:MM" cutoff

    Comparison is at minute resolution: 14:30:59 is not past a 14:30 cutoff.
    """
    hours, minutes = parse_hhmm(recurring_time)
    return (now.hour, now.minute) > (hours, minutes)


def is_late_today(task: Task, now: datetime) -> bool:
    """
    Check whether today's occurrence of a recurring task is late

    Args:
        task: Task snapshot
        now: Current instant

    Returns:
        True if scheduled today, not done, not suspended, and past its cutoff
    """
    if not task.is_recurring or not task.recurring_time:
        return False
    if is_suspended(task, now):
        return False

    today = now.date()
    if not scheduled_on(task, today):
        return False
    if done_on(task, today, now):
        return False

    return cutoff_passed(task.recurring_time, now)


def toggle_completion_today(task: Task, now: datetime) -> Task:
    """
    Mark today's occurrence done, or undo it if already done today

    Args:
        task: Recurring task snapshot
        now: Current instant

    Returns:
        Updated snapshot
    """
    if done_on(task, now.date(), now):
        logger.debug(f"[Recurrence] Cleared today's completion for task {task.id}")
        return task.model_copy(update={"last_recurring_completion": None})

    logger.debug(f"[Recurrence] Marked task {task.id} done for {now.date().isoformat()}")
    return task.model_copy(update={"last_recurring_completion": now})


def todays_routines(tasks: List[Task], now: datetime) -> RoutineProgress:
    """
    Recurring tasks scheduled for today and today's completion progress

    Args:
        tasks: Task snapshots
        now: Current instant

    Returns:
        RoutineProgress with percent rounded to an integer (0 when nothing is scheduled)
    """
    today = now.date()
    scheduled = [t for t in tasks if scheduled_on(t, today)]
    completed_count = sum(1 for t in scheduled if done_on(t, today, now))
    percent = round(completed_count / (len(scheduled) or 1) * 100)

    return RoutineProgress(
        day=today,
        tasks=scheduled,
        completed_count=completed_count,
        percent=percent,
    )


def validate_recurrence(task: Task) -> None:
    """
    Validation rule for create/edit collaborators

    The evaluator itself treats an empty day set as "never scheduled"; this check
    lets callers reject such records before they are saved.

    Raises:
        ValidationError: on an empty or out-of-range day set, or a suspension bound on a
            task that is not suspended
    """
    if task.is_recurring:
        if not task.recurring_days:
            raise ValidationError("recurring task needs at least one weekday", field="recurringDays")
        invalid = [d for d in task.recurring_days if d not in WEEKDAY_INDICES]
        if invalid:
            raise ValidationError(
                f"weekday indices must be 0..6, got {invalid}", field="recurringDays"
            )

    if task.suspended_until is not None and not task.is_suspended:
        raise ValidationError("suspension bound set on a task that is not suspended", field="suspendedUntil")
