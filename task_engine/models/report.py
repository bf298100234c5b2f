"""
Derived view models: windows, badges, dashboard report, task board
"""

from typing import Optional, List, Dict
from datetime import datetime, date
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from task_engine.models.task import Task


class DisplayStatus(str, Enum):
    """Effective status shown for a task at a given instant"""
    ON_TRACK = "on_track"
    DUE_SOON = "due_soon"
    DUE_TODAY = "due_today"
    OVERDUE = "overdue"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ReportWindow(BaseModel):
    """Reporting window; a missing bound is open on that side"""

    model_config = ConfigDict(populate_by_name=True)

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None


class TaskBadges(BaseModel):
    """Per-task derived facts for a live view"""

    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(alias="taskId")
    display_status: DisplayStatus = Field(alias="displayStatus")
    status_label: str = Field(alias="statusLabel")
    days_overdue: int = Field(0, alias="daysOverdue")
    elapsed_seconds: int = Field(0, alias="elapsedSeconds")
    is_running: bool = Field(False, alias="isRunning")
    is_suspended: bool = Field(False, alias="isSuspended")

    # Recurring tasks only
    scheduled_today: bool = Field(False, alias="scheduledToday")
    done_today: bool = Field(False, alias="doneToday")
    late_today: bool = Field(False, alias="lateToday")


class StatusDistribution(BaseModel):
    """Chart buckets of a dashboard report"""

    model_config = ConfigDict(populate_by_name=True)

    todo: int = 0
    late: int = 0
    standard_completed: int = Field(0, alias="standardCompleted")
    recurring_completed: int = Field(0, alias="recurringCompleted")
    recurring_total_in_period: int = Field(0, alias="recurringTotalInPeriod")
    cancelled: int = 0


class ActiveTaskEntry(BaseModel):
    """One row of the "most time spent" ranking"""

    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(alias="taskId")
    title: str
    total_seconds: int = Field(alias="totalSeconds")


class DashboardReport(BaseModel):
    """Aggregated metrics for one reporting window"""

    model_config = ConfigDict(populate_by_name=True)

    window: ReportWindow
    generated_at: datetime = Field(alias="generatedAt")
    is_current_window: bool = Field(alias="isCurrentWindow")

    total: int = 0
    completed: int = 0
    standard_completed: int = Field(0, alias="standardCompleted")
    recurring_completed_in_period: int = Field(0, alias="recurringCompletedInPeriod")
    pending: int = 0
    late: int = 0
    priority: int = 0
    total_time_seconds: int = Field(0, alias="totalTimeSeconds")
    completion_rate: int = Field(0, alias="completionRate")

    status_distribution: StatusDistribution = Field(
        default_factory=StatusDistribution, alias="statusDistribution"
    )
    most_active_tasks: List[ActiveTaskEntry] = Field(default_factory=list, alias="mostActiveTasks")


class DayGroup(BaseModel):
    """Tasks due on one day of the current week"""
    day: date
    tasks: List[Task] = Field(default_factory=list)


class WeekGroup(BaseModel):
    """Tasks due in one Sunday-to-Saturday week"""

    model_config = ConfigDict(populate_by_name=True)

    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    tasks: List[Task] = Field(default_factory=list)


class TaskBoard(BaseModel):
    """Top-level list view: priority column, backlog, and dated groups"""

    model_config = ConfigDict(populate_by_name=True)

    priority: List[Task] = Field(default_factory=list)
    backlog: List[Task] = Field(default_factory=list)
    past_weeks: List[WeekGroup] = Field(default_factory=list, alias="pastWeeks")
    current_week: List[DayGroup] = Field(default_factory=list, alias="currentWeek")
    future_weeks: List[WeekGroup] = Field(default_factory=list, alias="futureWeeks")
    subtask_counts: Dict[str, int] = Field(default_factory=dict, alias="subtaskCounts")


class RoutineProgress(BaseModel):
    """Today's recurring duties and how many are done"""

    model_config = ConfigDict(populate_by_name=True)

    day: date
    tasks: List[Task] = Field(default_factory=list)
    completed_count: int = Field(0, alias="completedCount")
    percent: int = 0
