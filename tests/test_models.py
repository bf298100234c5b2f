"""
Tests for task record parsing
"""

import pytest
from datetime import datetime, date, timezone
from pydantic import ValidationError
from task_engine.models.task import Task, TaskStatus


RECORD = {
    "id": "t1",
    "ownerId": "u1",
    "title": "Write report",
    "description": "",
    "deadline": "2025-01-10T09:00:00",
    "requester": "Ana",
    "isPriority": True,
    "status": "Active",
    "createdAt": "2025-01-01T08:00:00",
    "completedAt": None,
    "elapsedTimeSeconds": 90,
    "timerStartedAt": None,
    "parentId": None,
    "isRecurring": False,
    "recurringDays": [],
    "recurringTime": "",
    "lastRecurringCompletion": None,
    "comments": [
        {"id": "c1", "text": "started", "createdAt": "2025-01-02T10:00:00Z", "isCompleted": True},
    ],
}


def test_parse_camel_case_record():
    """Test a storage record parses into a Task"""
    task = Task.model_validate(RECORD)

    assert task.owner_id == "u1"
    assert task.deadline == datetime(2025, 1, 10, 9, 0)
    assert task.status == TaskStatus.ACTIVE
    assert task.description is None
    assert task.recurring_time is None
    assert task.is_priority is True
    assert task.comments[0].created_at == datetime(2025, 1, 2, 10, 0, tzinfo=timezone.utc)
    assert task.comments[0].is_completed is True


def test_legacy_owner_field():
    """Test the legacy userID key is accepted for the owner"""
    record = {k: v for k, v in RECORD.items() if k != "ownerId"}
    record["userID"] = "legacy"
    assert Task.model_validate(record).owner_id == "legacy"


def test_serializes_with_aliases():
    """Test dumping by alias restores the record shape"""
    data = Task.model_validate(RECORD).model_dump(by_alias=True)
    assert data["ownerId"] == "u1"
    assert data["elapsedTimeSeconds"] == 90
    assert "owner_id" not in data


def test_malformed_deadline_fails_fast():
    """Test an unparsable instant is rejected at parse time"""
    with pytest.raises(ValidationError):
        Task.model_validate({**RECORD, "deadline": "next tuesday"})


def test_malformed_recurring_time_fails_fast():
    """Test an invalid daily cutoff is rejected"""
    with pytest.raises(ValidationError):
        Task.model_validate({**RECORD, "isRecurring": True, "recurringDays": [1], "recurringTime": "25:00"})


def test_recurring_time_normalized():
    """Test cutoff is normalized to zero-padded HH:MM"""
    task = Task.model_validate({**RECORD, "isRecurring": True, "recurringDays": [1], "recurringTime": "9:05"})
    assert task.recurring_time == "09:05"


def test_negative_elapsed_rejected():
    """Test elapsed base cannot be negative"""
    with pytest.raises(ValidationError):
        Task.model_validate({**RECORD, "elapsedTimeSeconds": -1})


def test_defaults_for_minimal_record():
    """Test a minimal record gets lifecycle defaults"""
    task = Task.model_validate(
        {"id": "t2", "ownerId": "u1", "title": "x", "createdAt": "2025-01-01T00:00:00", "recurringDays": None}
    )
    assert task.status == TaskStatus.ACTIVE
    assert task.elapsed_time_seconds == 0
    assert task.recurring_days == []
    assert task.comments == []
    assert task.suspended_until is None
    assert not task.is_running


def test_suspended_until_plain_date():
    """Test suspension bound parses from a plain date"""
    task = Task.model_validate({**RECORD, "isRecurring": True, "isSuspended": True, "suspendedUntil": "2025-06-10"})
    assert task.suspended_until == date(2025, 6, 10)


def test_terminal_flags():
    """Test terminal statuses"""
    assert TaskStatus.COMPLETED.is_terminal
    assert TaskStatus.CANCELLED.is_terminal
    assert not TaskStatus.ACTIVE.is_terminal
    assert not TaskStatus.LATE.is_terminal
