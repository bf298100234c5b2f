"""
Analytics service
"""

from datetime import date
from typing import List, Optional, Sequence
from task_engine.config.settings import settings
from task_engine.models.task import Task
from task_engine.models.report import DashboardReport, ReportWindow, TaskBadges, TaskBoard, RoutineProgress
from task_engine.services.range_filter import (
    build_window,
    shortcut_dates,
    default_window_dates,
    filter_tasks,
    is_current_window,
)
from task_engine.services.metrics import aggregate_metrics
from task_engine.services.badges import build_all_badges
from task_engine.services.board import build_board
from task_engine.services.recurrence import todays_routines
from task_engine.utils.date_utils import Clock, SystemClock
from task_engine.utils.logger import logger


class AnalyticsService:
    """Service for dashboard reports and live-view derivations"""

    def __init__(self, clock: Optional[Clock] = None, default_window_days: Optional[int] = None):
        """
        Initialize analytics service

        Args:
            clock: Source of "now" (system clock if omitted)
            default_window_days: Half-width of the default window (settings if omitted)
        """
        self.clock = clock or SystemClock()
        self.default_window_days = (
            default_window_days if default_window_days is not None else settings.default_window_days()
        )
        self.logger = logger

    def window_for(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> ReportWindow:
        """
        Build a window from calendar dates

        Args:
            start_date: First day (None = open)
            end_date: Last day (None = open)

        Returns:
            ReportWindow in the clock's zone
        """
        return build_window(start_date, end_date, self.clock.now())

    def window_for_period(self, period: str) -> ReportWindow:
        """
        Build a window from a shortcut name ("today", "month", "3months", "year")

        Args:
            period: Shortcut name

        Returns:
            ReportWindow
        """
        now = self.clock.now()
        start_date, end_date = shortcut_dates(period, now.date())
        return build_window(start_date, end_date, now)

    def default_window(self) -> ReportWindow:
        """Today plus/minus the configured number of days"""
        now = self.clock.now()
        start_date, end_date = default_window_dates(now.date(), self.default_window_days)
        return build_window(start_date, end_date, now)

    def filter(self, tasks: Sequence[Task], window: ReportWindow) -> List[Task]:
        """Tasks belonging to the window"""
        return filter_tasks(tasks, window, self.clock.now())

    def get_report(self, tasks: Sequence[Task], window: ReportWindow) -> DashboardReport:
        """
        Filter tasks to the window and aggregate the dashboard metrics

        Args:
            tasks: All task snapshots of the owner
            window: Reporting window

        Returns:
            DashboardReport
        """
        try:
            now = self.clock.now()
            filtered = filter_tasks(tasks, window, now)
            report = aggregate_metrics(filtered, window, now)

            self.logger.info(
                f"[AnalyticsService] Report {window.start} - {window.end} "
                f"(current={is_current_window(window, now)}): "
                f"{report.total}/{len(tasks)} tasks, {report.completed} completed, "
                f"{report.late} late, rate {report.completion_rate}%"
            )
            return report

        except Exception as e:
            self.logger.error(f"Error building report: {e}", exc_info=True)
            raise

    def get_report_for_period(self, tasks: Sequence[Task], period: str) -> DashboardReport:
        """Report for a named shortcut window"""
        return self.get_report(tasks, self.window_for_period(period))

    def get_badges(self, tasks: Sequence[Task]) -> List[TaskBadges]:
        """Badges for every task at the clock's current instant"""
        return build_all_badges(tasks, self.clock.now())

    def get_board(self, tasks: Sequence[Task], window: Optional[ReportWindow] = None) -> TaskBoard:
        """List-view grouping, restricted to the window's deadlines if given"""
        return build_board(tasks, self.clock.now(), window)

    def get_routines(self, tasks: Sequence[Task]) -> RoutineProgress:
        """Today's recurring duties and their progress"""
        return todays_routines(tasks, self.clock.now())
