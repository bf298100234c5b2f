"""
Tests for message formatting
"""

from datetime import date
from task_engine.models.report import DisplayStatus, TaskBadges
from task_engine.services.metrics import aggregate_metrics
from task_engine.services.range_filter import build_window
from task_engine.utils.formatters import (
    format_time,
    format_weekdays,
    format_overdue,
    status_label,
    format_badges,
    format_report,
)


def test_format_time():
    """Test HH:MM:SS with hours past a day"""
    assert format_time(0) == "00:00:00"
    assert format_time(3725) == "01:02:05"
    assert format_time(90000) == "25:00:00"
    assert format_time(-5) == "00:00:00"


def test_format_weekdays():
    """Test Sunday-first labels, duplicates dropped"""
    assert format_weekdays([5, 1, 0, 1]) == "Sun, Mon, Fri"
    assert format_weekdays([]) == ""


def test_format_overdue():
    """Test overdue wording"""
    assert format_overdue(1, True) == "Overdue"
    assert format_overdue(1, False) == "Overdue by 1 day"
    assert format_overdue(4, False) == "Overdue by 4 days"


def test_status_label():
    """Test plain labels"""
    assert status_label(DisplayStatus.ON_TRACK) == "Active"
    assert status_label(DisplayStatus.DUE_SOON) == "Due soon"
    assert status_label(DisplayStatus.OVERDUE) == "Overdue"
    assert status_label(DisplayStatus.OVERDUE, 3) == "Overdue by 3 days"


def test_format_badges():
    """Test one-line badge summary"""
    badges = TaskBadges(
        task_id="t1",
        display_status=DisplayStatus.ON_TRACK,
        status_label="Done today",
        elapsed_seconds=65,
        is_running=True,
        done_today=True,
    )
    assert format_badges(badges) == "Done today | done today | 00:01:05 (running)"


def test_format_report(make_task, now):
    """Test report text includes counts and ranking"""
    window = build_window(date(2025, 1, 1), date(2025, 1, 31), now)
    report = aggregate_metrics([make_task(title="write", elapsed_time_seconds=120)], window, now)

    text = format_report(report)

    assert text.startswith("Report 2025-01-01 - 2025-01-31 (current)")
    assert "Total: 1" in text
    assert "Completed: 0 (0%)" in text
    assert "Time invested: 00:02:00" in text
    assert "  1. write - 00:02:00" in text


def test_format_report_open_window(now):
    """Test open bounds print as ellipsis"""
    report = aggregate_metrics([], build_window(None, date(2025, 1, 31), now), now)
    assert format_report(report).startswith("Report ... - 2025-01-31")
    assert "Most time spent" not in format_report(report)
