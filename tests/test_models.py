import datetime as dt

import pytest

from core.exceptions import ValidationRejected
from core.models import Task, TaskFilter, parse_timestamp


def test_from_api_reads_wire_record():
    task = Task.from_api(
        {
            "_id": "65f0",
            "title": "Buy milk",
            "priority": "Medium",
            "completed": True,
            "createdAt": "2024-03-10T12:00:00.000Z",
            "completedAt": "2024-03-11T08:30:00.000Z",
            "__v": 0,
        }
    )
    assert task.id == "65f0"
    assert task.description == ""
    assert task.priority == "Medium"
    assert task.created_at == dt.datetime(2024, 3, 10, 12, tzinfo=dt.timezone.utc)
    assert task.completed_at == dt.datetime(2024, 3, 11, 8, 30, tzinfo=dt.timezone.utc)
    assert task.is_consistent


def test_from_api_defaults_priority_to_low():
    task = Task.from_api({"id": "1", "title": "t", "createdAt": "2024-03-10T12:00:00Z"})
    assert task.priority == "Low"
    assert task.completed is False
    assert task.completed_at is None


def test_from_api_rejects_unknown_priority():
    with pytest.raises(ValidationRejected):
        Task.from_api({"_id": "1", "title": "t", "priority": "Urgent", "createdAt": "2024-03-10T12:00:00Z"})


def test_from_api_requires_id_and_created_at():
    with pytest.raises(ValidationRejected):
        Task.from_api({"title": "t", "createdAt": "2024-03-10T12:00:00Z"})
    with pytest.raises(ValidationRejected):
        Task.from_api({"_id": "1", "title": "t"})


def test_pairing_invariant_detects_mismatch():
    task = Task.from_api({"_id": "1", "title": "t", "completed": True, "createdAt": "2024-03-10T12:00:00Z"})
    assert not task.is_consistent


def test_naive_timestamps_are_utc():
    assert parse_timestamp("2024-03-10T12:00:00").tzinfo == dt.timezone.utc
    assert parse_timestamp(None) is None
    with pytest.raises(ValidationRejected):
        parse_timestamp("yesterday")


def test_filter_rejects_unknown_values():
    with pytest.raises(ValueError):
        TaskFilter(priority="Urgent")
    with pytest.raises(ValueError):
        TaskFilter(status="Archived")
