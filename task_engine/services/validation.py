"""
Record validation for create/edit collaborators

Evaluation never calls these checks: an invalid combination degrades to a
defined output there. Writers call validate_task before saving a record.
"""

from task_engine.models.task import Task, TaskStatus
from task_engine.services.recurrence import validate_recurrence
from task_engine.utils.error_handler import ValidationError


def validate_task(task: Task) -> Task:
    """
    Check a task record against the lifecycle and recurrence invariants

    Args:
        task: Task snapshot about to be saved

    Returns:
        The same task, for chaining

    Raises:
        ValidationError: on the first violated rule
    """
    if not task.title.strip():
        raise ValidationError("title is required", field="title")

    if task.status == TaskStatus.COMPLETED and task.completed_at is None:
        raise ValidationError("completed task needs completedAt", field="completedAt")
    if task.status != TaskStatus.COMPLETED and task.completed_at is not None:
        raise ValidationError("completedAt is only set on completed tasks", field="completedAt")

    if task.status.is_terminal and task.timer_started_at is not None:
        raise ValidationError("terminal task has a running timer", field="timerStartedAt")

    if task.parent_id is not None and task.parent_id == task.id:
        raise ValidationError("task cannot be its own parent", field="parentId")

    validate_recurrence(task)
    return task
