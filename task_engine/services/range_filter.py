"""
Range filter: which tasks belong to a reporting window

Each task is routed to exactly one branch of an ordered decision table, and the
branch's rule decides membership:

    RECURRING          -> completed in window, or scheduled on a day of the window
    COMPLETED          -> completedAt inside the window
    CANCELLED          -> deadline (or createdAt) inside the window
    ACTIVE_CURRENT     -> backlog, or due no later than the window end
    ACTIVE_HISTORICAL  -> deadline (or createdAt) inside the window
"""

import math
from datetime import datetime, date, timedelta
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple
from task_engine.config.constants import (
    LONG_RANGE_DAYS,
    SECONDS_PER_DAY,
    SHORTCUT_TODAY,
    SHORTCUT_MONTH,
    SHORTCUT_THREE_MONTHS,
    SHORTCUT_YEAR,
)
from task_engine.models.task import Task, TaskStatus
from task_engine.models.report import ReportWindow
from task_engine.services.recurrence import scheduled_on
from task_engine.services.suspension import is_suspended
from task_engine.utils.date_utils import to_local, start_of_day, end_of_day, iter_days, add_months


class FilterBranch(str, Enum):
    """Decision-table branch a task is routed to"""
    RECURRING = "recurring"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ACTIVE_CURRENT = "active_current"
    ACTIVE_HISTORICAL = "active_historical"


def build_window(
    start_date: Optional[date],
    end_date: Optional[date],
    now: datetime,
) -> ReportWindow:
    """
    Expand calendar-date bounds to local start-of-day / end-of-day instants

    Args:
        start_date: First day of the window (None = open)
        end_date: Last day of the window (None = open)
        now: Current instant (defines the local zone)

    Returns:
        ReportWindow
    """
    tz = now.tzinfo
    return ReportWindow(
        start=start_of_day(start_date, tz) if start_date else None,
        end=end_of_day(end_date, tz) if end_date else None,
    )


def shortcut_dates(name: str, today: date) -> Tuple[date, date]:
    """
    Calendar bounds for a named window shortcut

    Args:
        name: "today", "month", "3months" or "year"
        today: Current calendar day

    Returns:
        (start_date, end_date)

    Raises:
        ValueError: on an unknown shortcut
    """
    if name == SHORTCUT_TODAY:
        return today, today
    if name == SHORTCUT_MONTH:
        first = today.replace(day=1)
        last = add_months(first, 1) - timedelta(days=1)
        return first, last
    if name == SHORTCUT_THREE_MONTHS:
        return add_months(today, -3), today
    if name == SHORTCUT_YEAR:
        return date(today.year, 1, 1), date(today.year, 12, 31)
    raise ValueError(f"Unknown window shortcut: {name!r}")


def default_window_dates(today: date, days: int) -> Tuple[date, date]:
    """Window centred on today: [today - days, today + days]"""
    return today - timedelta(days=days), today + timedelta(days=days)


def in_window(instant: Optional[datetime], window: ReportWindow, now: datetime) -> bool:
    """True if the instant lies inside the window, bounds inclusive, open sides unbounded"""
    if instant is None:
        return False

    value = to_local(instant, now)
    if window.start is not None and value < to_local(window.start, now):
        return False
    if window.end is not None and value > to_local(window.end, now):
        return False
    return True


def is_current_window(window: ReportWindow, now: datetime) -> bool:
    """True if now lies inside the window"""
    return in_window(now, window, now)


def classify(task: Task, is_current: bool) -> FilterBranch:
    """Route a task to its decision-table branch"""
    if task.is_recurring:
        return FilterBranch.RECURRING
    if task.status == TaskStatus.COMPLETED:
        return FilterBranch.COMPLETED
    if task.status == TaskStatus.CANCELLED:
        return FilterBranch.CANCELLED
    if is_current:
        return FilterBranch.ACTIVE_CURRENT
    return FilterBranch.ACTIVE_HISTORICAL


def _recurring_rule(task: Task, window: ReportWindow, now: datetime, is_current: bool) -> bool:
    if is_current and is_suspended(task, now):
        return False

    if in_window(task.last_recurring_completion, window, now):
        return True

    # Half-open windows treat recurring duties as always relevant
    if window.start is None or window.end is None:
        return True

    start = to_local(window.start, now)
    end = to_local(window.end, now)
    span_days = math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)
    if span_days >= LONG_RANGE_DAYS:
        return True

    # Suspension history is unknown, so past days are not checked against it
    return any(scheduled_on(task, day) for day in iter_days(start.date(), end.date()))


def _completed_rule(task: Task, window: ReportWindow, now: datetime, is_current: bool) -> bool:
    return in_window(task.completed_at, window, now)


def _dated_rule(task: Task, window: ReportWindow, now: datetime, is_current: bool) -> bool:
    reference = task.deadline if task.deadline is not None else task.created_at
    return in_window(reference, window, now)


def _active_current_rule(task: Task, window: ReportWindow, now: datetime, is_current: bool) -> bool:
    if task.deadline is None:
        return True
    if window.end is None:
        return True
    return to_local(task.deadline, now) <= to_local(window.end, now)


RULES: Dict[FilterBranch, Callable[[Task, ReportWindow, datetime, bool], bool]] = {
    FilterBranch.RECURRING: _recurring_rule,
    FilterBranch.COMPLETED: _completed_rule,
    FilterBranch.CANCELLED: _dated_rule,
    FilterBranch.ACTIVE_CURRENT: _active_current_rule,
    FilterBranch.ACTIVE_HISTORICAL: _dated_rule,
}


def belongs_to_window(
    task: Task,
    window: ReportWindow,
    now: datetime,
    is_current: Optional[bool] = None,
) -> bool:
    """
    Decide whether a task belongs to a reporting window

    Args:
        task: Task snapshot
        window: Reporting window
        now: Current instant
        is_current: Precomputed is_current_window(window, now), if available

    Returns:
        True if the task belongs to the window
    """
    if window.is_unbounded:
        return True
    if is_current is None:
        is_current = is_current_window(window, now)

    branch = classify(task, is_current)
    return RULES[branch](task, window, now, is_current)


def filter_tasks(tasks: Iterable[Task], window: ReportWindow, now: datetime) -> List[Task]:
    """
    Tasks belonging to the window, in their original order

    Args:
        tasks: Task snapshots
        window: Reporting window
        now: Current instant

    Returns:
        Filtered list
    """
    if window.is_unbounded:
        return list(tasks)

    is_current = is_current_window(window, now)
    return [t for t in tasks if belongs_to_window(t, window, now, is_current)]
