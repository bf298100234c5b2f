"""
Task model
"""

from typing import Optional, List
from datetime import datetime, date
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, AliasChoices, field_validator
from task_engine.utils.date_utils import parse_hhmm


class TaskStatus(str, Enum):
    """Stored lifecycle status"""
    ACTIVE = "Active"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    LATE = "Late"  # legacy explicit state; lateness is normally derived

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.COMPLETED, TaskStatus.CANCELLED)


class Comment(BaseModel):
    """Comment on a task, passed through unchanged by the engine"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    text: str
    created_at: datetime = Field(alias="createdAt")
    is_completed: bool = Field(False, alias="isCompleted")


class Task(BaseModel):
    """
    Task record snapshot

    Field aliases follow the camelCase record shape used by the storage layer.
    Absent or empty timestamps mean "not set"; malformed ones fail validation here.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    owner_id: str = Field(
        validation_alias=AliasChoices("ownerId", "userID", "owner_id"),
        serialization_alias="ownerId",
    )
    title: str
    description: Optional[str] = None
    requester: Optional[str] = None
    deadline: Optional[datetime] = None

    status: TaskStatus = TaskStatus.ACTIVE
    created_at: datetime = Field(alias="createdAt")
    completed_at: Optional[datetime] = Field(None, alias="completedAt")

    # Timer
    elapsed_time_seconds: int = Field(0, ge=0, alias="elapsedTimeSeconds")
    timer_started_at: Optional[datetime] = Field(None, alias="timerStartedAt")

    # Priority column
    is_priority: bool = Field(False, alias="isPriority")
    priority_order: Optional[int] = Field(None, alias="priorityOrder")

    # Hierarchy
    parent_id: Optional[str] = Field(None, alias="parentId")

    # Recurrence
    is_recurring: bool = Field(False, alias="isRecurring")
    recurring_days: List[int] = Field(default_factory=list, alias="recurringDays")
    recurring_time: Optional[str] = Field(None, alias="recurringTime")  # "HH:MM" daily cutoff
    last_recurring_completion: Optional[datetime] = Field(None, alias="lastRecurringCompletion")

    # Suspension
    is_suspended: bool = Field(False, alias="isSuspended")
    suspended_until: Optional[date] = Field(None, alias="suspendedUntil")  # last suspended day, inclusive

    comments: List[Comment] = Field(default_factory=list)

    @field_validator(
        "deadline",
        "completed_at",
        "timer_started_at",
        "last_recurring_completion",
        "description",
        "requester",
        "parent_id",
        mode="before",
    )
    @classmethod
    def _blank_as_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("recurring_days", mode="before")
    @classmethod
    def _days_as_list(cls, value):
        if value is None:
            return []
        return value

    @field_validator("recurring_time", mode="before")
    @classmethod
    def _check_recurring_time(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        hours, minutes = parse_hhmm(value)
        return f"{hours:02d}:{minutes:02d}"

    @field_validator("suspended_until", mode="before")
    @classmethod
    def _suspension_bound_as_date(cls, value):
        # Stored either as a plain date or as local midnight serialized as an instant
        if isinstance(value, str):
            if not value.strip():
                return None
            if "T" in value:
                value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone()
            return value.date()
        return value

    @property
    def is_running(self) -> bool:
        return self.timer_started_at is not None
