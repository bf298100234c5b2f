"""
Per-task badges for live views
"""

from datetime import datetime
from typing import Iterable, List
from task_engine.models.task import Task, TaskStatus
from task_engine.models.report import DisplayStatus, TaskBadges
from task_engine.services.timer import calculate_elapsed
from task_engine.services.suspension import is_suspended
from task_engine.services.recurrence import scheduled_on, done_on, is_late_today
from task_engine.services.status_resolver import resolve_status, days_overdue, is_due_today
from task_engine.utils.formatters import status_label


def _recurring_status(task: Task, suspended: bool, late: bool, done: bool, scheduled: bool) -> DisplayStatus:
    if task.status == TaskStatus.COMPLETED:
        return DisplayStatus.COMPLETED
    if task.status == TaskStatus.CANCELLED:
        return DisplayStatus.CANCELLED
    if suspended or done:
        return DisplayStatus.ON_TRACK
    if late:
        return DisplayStatus.OVERDUE
    if scheduled:
        return DisplayStatus.DUE_TODAY
    return DisplayStatus.ON_TRACK


def build_badges(task: Task, now: datetime) -> TaskBadges:
    """
    Derive a task's badges at the given instant

    Recurring tasks report today's occurrence (scheduled / done / late) and
    their suspension; other tasks go through the deadline status resolver.

    Args:
        task: Task snapshot
        now: Current instant

    Returns:
        TaskBadges
    """
    elapsed = calculate_elapsed(task, now)

    if task.is_recurring:
        today = now.date()
        suspended = is_suspended(task, now)
        scheduled = scheduled_on(task, today)
        done = done_on(task, today, now)
        late = is_late_today(task, now)
        display = _recurring_status(task, suspended, late, done, scheduled)

        return TaskBadges(
            task_id=task.id,
            display_status=display,
            status_label="Suspended" if suspended else ("Done today" if done else status_label(display)),
            elapsed_seconds=elapsed,
            is_running=task.is_running,
            is_suspended=suspended,
            scheduled_today=scheduled,
            done_today=done,
            late_today=late,
        )

    display = resolve_status(task, now)
    overdue = days_overdue(task.deadline, now) if display == DisplayStatus.OVERDUE else 0

    return TaskBadges(
        task_id=task.id,
        display_status=display,
        status_label=status_label(display, overdue, is_due_today(task.deadline, now)),
        days_overdue=overdue,
        elapsed_seconds=elapsed,
        is_running=task.is_running,
    )


def build_all_badges(tasks: Iterable[Task], now: datetime) -> List[TaskBadges]:
    """Badges for every task, in input order"""
    return [build_badges(t, now) for t in tasks]
