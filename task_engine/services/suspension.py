"""
Suspension evaluator for recurring tasks
"""

from datetime import datetime
from task_engine.models.task import Task


def is_suspended(task: Task, now: datetime) -> bool:
    """
    Check whether a recurring task is suspended right now

    The bound is the last suspended calendar day; the task resumes on the
    following day at 00:00. Time of day within the bound day is irrelevant.

    Args:
        task: Task snapshot
        now: Current instant

    Returns:
        True if suspended
    """
    if not task.is_recurring or not task.is_suspended:
        return False

    # No bound: suspended until manually resumed
    if task.suspended_until is None:
        return True

    return now.date() <= task.suspended_until
