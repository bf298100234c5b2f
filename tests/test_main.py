"""
Tests for the command-line report
"""

import json
import pytest
from pydantic import ValidationError
from task_engine.main import load_tasks, main


RECORDS = [
    {"id": "a", "ownerId": "u1", "title": "Alpha", "createdAt": "2025-01-01T09:00:00", "elapsedTimeSeconds": 60},
    {"id": "b", "ownerId": "u2", "title": "Beta", "createdAt": "2025-01-02T09:00:00"},
]


@pytest.fixture
def tasks_file(tmp_path):
    """JSON snapshot in list form"""
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps(RECORDS), encoding="utf-8")
    return path


def test_load_tasks_list(tasks_file):
    """Test list snapshots load in order"""
    tasks = load_tasks(tasks_file)
    assert [t.id for t in tasks] == ["a", "b"]


def test_load_tasks_keyed_by_id(tmp_path):
    """Test object snapshots take ids from the keys"""
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps({r["id"]: {k: v for k, v in r.items() if k != "id"} for r in RECORDS}),
        encoding="utf-8",
    )
    assert sorted(t.id for t in load_tasks(path)) == ["a", "b"]


def test_load_tasks_owner_filter(tasks_file):
    """Test owner filter"""
    assert [t.id for t in load_tasks(tasks_file, "u2")] == ["b"]


def test_load_tasks_malformed(tmp_path):
    """Test malformed records raise"""
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps([{"id": "x", "title": "no owner", "createdAt": "2025-01-01"}]), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_tasks(path)


def test_main_text_report(tasks_file, capsys):
    """Test text report over an unbounded-start window"""
    assert main([str(tasks_file), "--end", "2099-12-31"]) == 0
    out = capsys.readouterr().out
    assert "Report ... - 2099-12-31" in out
    assert "Total: 2" in out


def test_main_json_report(tasks_file, capsys):
    """Test JSON output uses record field names"""
    assert main([str(tasks_file), "--period", "year", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert "completionRate" in data
    assert "statusDistribution" in data


def test_main_board(tasks_file, capsys):
    """Test board output lists the backlog"""
    assert main([str(tasks_file), "--board", "--owner", "u1"]) == 0
    out = capsys.readouterr().out
    assert "Backlog (1):" in out
    assert "  - Alpha" in out


def test_main_missing_file(tmp_path, capsys):
    """Test missing input returns an error code"""
    assert main([str(tmp_path / "missing.json")]) == 1
    assert "An unexpected error occurred." in capsys.readouterr().err


def test_main_malformed_file(tmp_path, capsys):
    """Test malformed records return an error code"""
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps([{"id": "x"}]), encoding="utf-8")
    assert main([str(path)]) == 1
    assert "Malformed task record" in capsys.readouterr().err


def test_load_tasks_keyed_entry_not_object(tmp_path):
    """Test keyed snapshots reject non-object entries"""
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps({"a": "Alpha"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_tasks(path)


def test_load_tasks_scalar_snapshot(tmp_path):
    """Test a snapshot that is neither list nor object is rejected"""
    path = tmp_path / "tasks.json"
    path.write_text("42", encoding="utf-8")
    with pytest.raises(ValueError):
        load_tasks(path)


def test_main_keyed_entry_not_object(tmp_path):
    """Test bad keyed entries return an error code instead of crashing"""
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps({"a": ["not", "a", "task"]}), encoding="utf-8")
    assert main([str(path)]) == 1


def test_main_board_shows_badges_and_weekdays(tmp_path, capsys):
    """Test board lines carry badges and recurring tasks list their weekdays"""
    path = tmp_path / "tasks.json"
    records = RECORDS + [
        {
            "id": "r",
            "ownerId": "u1",
            "title": "Stretch",
            "createdAt": "2025-01-01T09:00:00",
            "isRecurring": True,
            "recurringDays": [1, 3, 5],
        },
    ]
    path.write_text(json.dumps(records), encoding="utf-8")

    assert main([str(path), "--board", "--owner", "u1"]) == 0
    out = capsys.readouterr().out
    assert "  - Alpha [Active | 00:01:00]" in out
    assert "Recurring (1):" in out
    assert "  ~ Stretch (Mon, Wed, Fri) [" in out
