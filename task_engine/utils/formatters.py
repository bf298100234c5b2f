"""
Message formatting utilities
"""

from typing import Iterable
from task_engine.config.constants import SECONDS_PER_HOUR, SECONDS_PER_MINUTE, WEEKDAY_LABELS
from task_engine.models.report import DashboardReport, DisplayStatus, TaskBadges


STATUS_LABELS = {
    DisplayStatus.ON_TRACK: "Active",
    DisplayStatus.DUE_SOON: "Due soon",
    DisplayStatus.DUE_TODAY: "Due today",
    DisplayStatus.OVERDUE: "Overdue",
    DisplayStatus.COMPLETED: "Completed",
    DisplayStatus.CANCELLED: "Cancelled",
}


def format_time(seconds: int) -> str:
    """
    Format seconds as HH:MM:SS

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration, hours not capped at 24
    """
    seconds = max(0, int(seconds))
    hours = seconds // SECONDS_PER_HOUR
    minutes = (seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
    secs = seconds % SECONDS_PER_MINUTE
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_weekdays(days: Iterable[int]) -> str:
    """Comma-separated weekday labels in Sunday-first order"""
    return ", ".join(WEEKDAY_LABELS[d] for d in sorted(set(days)) if 0 <= d < len(WEEKDAY_LABELS))


def format_overdue(days_overdue: int, due_today: bool) -> str:
    """
    Overdue label for an active task

    A task that slipped past a deadline set for today reads "Overdue"; older
    deadlines show the day count.
    """
    if days_overdue <= 1 and due_today:
        return "Overdue"
    suffix = "s" if days_overdue > 1 else ""
    return f"Overdue by {days_overdue} day{suffix}"


def status_label(display_status: DisplayStatus, days_overdue: int = 0, due_today: bool = False) -> str:
    """Human-readable label for a display status"""
    if display_status == DisplayStatus.OVERDUE and days_overdue > 0:
        return format_overdue(days_overdue, due_today)
    return STATUS_LABELS[display_status]


def format_badges(badges: TaskBadges) -> str:
    """One-line summary of a task's badges"""
    parts = [badges.status_label]
    if badges.is_suspended:
        parts.append("suspended")
    if badges.done_today:
        parts.append("done today")
    parts.append(format_time(badges.elapsed_seconds) + (" (running)" if badges.is_running else ""))
    return " | ".join(parts)


def format_report(report: DashboardReport) -> str:
    """
    Format a dashboard report as plain text

    Args:
        report: Dashboard report

    Returns:
        Multi-line report
    """
    start = report.window.start.strftime("%Y-%m-%d") if report.window.start else "..."
    end = report.window.end.strftime("%Y-%m-%d") if report.window.end else "..."
    dist = report.status_distribution

    lines = [
        f"Report {start} - {end}" + (" (current)" if report.is_current_window else ""),
        "",
        f"Total: {report.total}",
        f"Completed: {report.completed} ({report.completion_rate}%)",
        f"  standard: {report.standard_completed}",
        f"  recurring in period: {report.recurring_completed_in_period} of {dist.recurring_total_in_period}",
        f"Pending: {report.pending}",
        f"Late: {report.late}",
        f"Priority: {report.priority}",
        f"Time invested: {format_time(report.total_time_seconds)}",
        "",
        f"To do: {dist.todo} | Late: {dist.late} | Cancelled: {dist.cancelled}",
    ]

    if report.most_active_tasks:
        lines.append("")
        lines.append("Most time spent:")
        for position, entry in enumerate(report.most_active_tasks, start=1):
            lines.append(f"  {position}. {entry.title} - {format_time(entry.total_seconds)}")

    return "\n".join(lines)
