"""
Pytest configuration and fixtures
"""

import pytest
from datetime import datetime
from task_engine.models.task import Task
from task_engine.utils.date_utils import FixedClock


# 2025-01-15 is a Wednesday
NOW = datetime(2025, 1, 15, 10, 30, 0)


@pytest.fixture
def now():
    """Fixed current instant used across tests"""
    return NOW


@pytest.fixture
def clock():
    """Clock frozen at NOW"""
    return FixedClock(NOW)


@pytest.fixture
def make_task():
    """Factory building Task snapshots from snake_case overrides"""
    counter = {"n": 0}

    def _make(**overrides) -> Task:
        counter["n"] += 1
        data = {
            "id": f"task_{counter['n']}",
            "owner_id": "user_1",
            "title": f"Task {counter['n']}",
            "created_at": datetime(2025, 1, 1, 9, 0, 0),
        }
        data.update(overrides)
        return Task(**data)

    return _make
