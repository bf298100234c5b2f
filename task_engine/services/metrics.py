"""
Metrics aggregator for a filtered task set
"""

from datetime import datetime
from typing import List, Sequence
from task_engine.config.constants import MOST_ACTIVE_LIMIT
from task_engine.models.task import Task, TaskStatus
from task_engine.models.report import (
    ReportWindow,
    DashboardReport,
    StatusDistribution,
    ActiveTaskEntry,
)
from task_engine.services.timer import calculate_elapsed
from task_engine.services.suspension import is_suspended
from task_engine.services.recurrence import is_late_today, scheduled_on
from task_engine.services.status_resolver import is_standard_late
from task_engine.services.range_filter import in_window, is_current_window


def completion_rate(completed: int, total: int) -> int:
    """Percentage of completed tasks, rounded; 0 for an empty set"""
    if total <= 0:
        return 0
    return round(100 * completed / total)


def is_recurring_done_in_period(task: Task, window: ReportWindow, now: datetime) -> bool:
    """True if a recurring task's last completion lies inside the window"""
    if not task.is_recurring:
        return False
    return in_window(task.last_recurring_completion, window, now)


def is_recurring_late(task: Task, now: datetime, today_in_window: bool) -> bool:
    """Today's lateness of a recurring task, only when today is part of the window"""
    if not today_in_window:
        return False
    return is_late_today(task, now)


def is_late(task: Task, now: datetime, today_in_window: bool) -> bool:
    """Lateness as counted in reports, for either kind of task"""
    if task.is_recurring:
        return is_recurring_late(task, now, today_in_window)
    return is_standard_late(task, now)


def is_pending(task: Task, window: ReportWindow, now: datetime) -> bool:
    """
    Still open within the window

    Excludes terminal tasks, recurring tasks already done in the period, and
    recurring tasks suspended right now.
    """
    if task.status.is_terminal:
        return False
    if is_recurring_done_in_period(task, window, now):
        return False
    if is_suspended(task, now):
        return False
    return True


def is_todo(task: Task, window: ReportWindow, now: datetime, today_in_window: bool) -> bool:
    """
    "To do" bucket of the status distribution

    Late tasks go to the late bucket instead. A recurring task counts only if it is
    scheduled for today when today is in the window; for other windows every
    active, unsuspended, not-yet-done recurring task counts.
    """
    if task.status.is_terminal:
        return False

    if task.is_recurring:
        if is_recurring_done_in_period(task, window, now):
            return False
        if is_recurring_late(task, now, today_in_window):
            return False
        if is_suspended(task, now):
            return False
        if today_in_window:
            return scheduled_on(task, now.date())
        return True

    if task.deadline is None:
        return task.status == TaskStatus.ACTIVE
    return task.status == TaskStatus.ACTIVE and not is_standard_late(task, now)


def most_active_tasks(tasks: Sequence[Task], now: datetime, limit: int = MOST_ACTIVE_LIMIT) -> List[ActiveTaskEntry]:
    """
    Tasks with the most accumulated time, descending

    Ties keep the input order; tasks with no time are left out.
    """
    timed = [(t, calculate_elapsed(t, now)) for t in tasks]
    timed = [(t, seconds) for t, seconds in timed if seconds > 0]
    timed.sort(key=lambda item: item[1], reverse=True)

    return [
        ActiveTaskEntry(task_id=t.id, title=t.title, total_seconds=seconds)
        for t, seconds in timed[:limit]
    ]


def aggregate_metrics(tasks: Sequence[Task], window: ReportWindow, now: datetime) -> DashboardReport:
    """
    Build the dashboard report for an already-filtered task set

    Args:
        tasks: Tasks belonging to the window (see range_filter.filter_tasks)
        window: Reporting window the set was filtered with
        now: Current instant

    Returns:
        DashboardReport
    """
    today_in_window = is_current_window(window, now)

    total = len(tasks)
    recurring_completed = sum(1 for t in tasks if is_recurring_done_in_period(t, window, now))
    recurring_total = sum(1 for t in tasks if t.is_recurring)
    standard_completed = sum(
        1 for t in tasks if not t.is_recurring and t.status == TaskStatus.COMPLETED
    )
    completed = standard_completed + recurring_completed

    late = sum(1 for t in tasks if is_late(t, now, today_in_window))
    pending_tasks = [t for t in tasks if is_pending(t, window, now)]
    priority = sum(1 for t in pending_tasks if t.is_priority)
    total_time = sum(calculate_elapsed(t, now) for t in tasks)

    distribution = StatusDistribution(
        todo=sum(1 for t in tasks if is_todo(t, window, now, today_in_window)),
        late=late,
        standard_completed=standard_completed,
        recurring_completed=recurring_completed,
        recurring_total_in_period=recurring_total,
        cancelled=sum(1 for t in tasks if t.status == TaskStatus.CANCELLED),
    )

    return DashboardReport(
        window=window,
        generated_at=now,
        is_current_window=today_in_window,
        total=total,
        completed=completed,
        standard_completed=standard_completed,
        recurring_completed_in_period=recurring_completed,
        pending=len(pending_tasks),
        late=late,
        priority=priority,
        total_time_seconds=total_time,
        completion_rate=completion_rate(completed, total),
        status_distribution=distribution,
        most_active_tasks=most_active_tasks(tasks, now),
    )
