"""
Task board grouping for the top-level list view
"""

from collections import Counter
from datetime import datetime, date
from typing import Dict, List, Optional, Sequence
from task_engine.models.task import Task
from task_engine.models.report import ReportWindow, DayGroup, WeekGroup, TaskBoard
from task_engine.services.range_filter import in_window
from task_engine.utils.date_utils import to_local, local_date, week_bounds
from task_engine.utils.logger import logger


def priority_column(tasks: Sequence[Task]) -> List[Task]:
    """Priority tasks in manual order; missing order indices sort as 0"""
    return sorted((t for t in tasks if t.is_priority), key=lambda t: t.priority_order or 0)


def backlog(tasks: Sequence[Task]) -> List[Task]:
    """Top-level tasks with no deadline that are neither priority nor recurring"""
    return [
        t for t in tasks
        if t.deadline is None and not t.is_priority and not t.is_recurring and t.parent_id is None
    ]


def subtask_counts(tasks: Sequence[Task]) -> Dict[str, int]:
    """Number of sub-tasks per parent id"""
    return dict(Counter(t.parent_id for t in tasks if t.parent_id is not None))


def _week_groups(buckets: Dict[date, List[Task]]) -> List[WeekGroup]:
    groups = []
    for start in sorted(buckets, reverse=True):
        _, end = week_bounds(start)
        groups.append(WeekGroup(start_date=start, end_date=end, tasks=buckets[start]))
    return groups


def build_board(tasks: Sequence[Task], now: datetime, window: Optional[ReportWindow] = None) -> TaskBoard:
    """
    Group tasks for the list view

    Dated, non-priority tasks are sorted newest deadline first and split into past
    weeks, days of the current (Sunday-based) week, and future weeks. When a
    window with both bounds is given, only deadlines inside it are grouped.

    Args:
        tasks: Task snapshots
        now: Current instant
        window: Optional window restricting dated tasks

    Returns:
        TaskBoard
    """
    week_start, week_end = week_bounds(now.date())

    dated = [t for t in tasks if t.deadline is not None and not t.is_priority]
    if window is not None and window.start is not None and window.end is not None:
        dated = [t for t in dated if in_window(t.deadline, window, now)]
    dated.sort(key=lambda t: to_local(t.deadline, now), reverse=True)

    past: Dict[date, List[Task]] = {}
    current: Dict[date, List[Task]] = {}
    future: Dict[date, List[Task]] = {}

    for task in dated:
        day = local_date(task.deadline, now)
        if day < week_start:
            past.setdefault(week_bounds(day)[0], []).append(task)
        elif day > week_end:
            future.setdefault(week_bounds(day)[0], []).append(task)
        else:
            current.setdefault(day, []).append(task)

    logger.debug(
        f"[Board] {len(dated)} dated tasks: {len(past)} past weeks, "
        f"{len(current)} days this week, {len(future)} future weeks"
    )

    return TaskBoard(
        priority=priority_column(tasks),
        backlog=backlog(tasks),
        past_weeks=_week_groups(past),
        current_week=[DayGroup(day=day, tasks=current[day]) for day in sorted(current, reverse=True)],
        future_weeks=_week_groups(future),
        subtask_counts=subtask_counts(tasks),
    )
