"""Tests for the Task model and its persisted record shape."""

import dataclasses
import json
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from todaytodo.core.models import Task

from conftest import NOW, UTC


def test_create_sets_defaults():
    task = Task.create("Buy milk", created_at=NOW)

    assert isinstance(task.id, uuid.UUID)
    assert task.title == "Buy milk"
    assert task.created_at == NOW
    assert task.is_completed is False
    assert task.expires_at is None


def test_create_gives_unique_ids():
    ids = {Task.create("Same", created_at=NOW).id for _ in range(50)}
    assert len(ids) == 50


def test_title_stored_verbatim():
    """Titles are not trimmed or normalised."""
    task = Task.create("  📋 Café  ", created_at=NOW)
    assert task.title == "  📋 Café  "


def test_task_is_immutable():
    task = Task.create("Frozen", created_at=NOW)
    with pytest.raises(dataclasses.FrozenInstanceError):
        task.is_completed = True


def test_to_dict_always_has_expires_at():
    record = Task.create("No expiry", created_at=NOW).to_dict()

    assert set(record) == {"id", "title", "is_completed", "created_at", "expires_at"}
    assert record["expires_at"] is None
    assert record["created_at"] == "2025-02-19T12:00:00+00:00"


def test_record_round_trip_with_expiry():
    plus_five = timezone(timedelta(hours=5, minutes=30))
    task = Task.create(
        "Call",
        created_at=datetime(2025, 2, 19, 8, 0, tzinfo=plus_five),
        expires_at=datetime(2025, 2, 19, 17, 45, tzinfo=plus_five),
    )
    task = dataclasses.replace(task, is_completed=True)

    restored = Task.from_dict(json.loads(json.dumps(task.to_dict())))

    assert restored == task
    assert restored.expires_at.utcoffset() == timedelta(hours=5, minutes=30)


def test_from_dict_naive_timestamp_becomes_aware():
    record = {
        "id": str(uuid.uuid4()),
        "title": "Legacy",
        "is_completed": False,
        "created_at": "2025-02-19T09:00:00",
        "expires_at": None,
    }

    task = Task.from_dict(record)

    assert task.created_at.tzinfo is not None


def test_from_dict_missing_field_raises():
    record = Task.create("x", created_at=NOW).to_dict()
    del record["expires_at"]

    with pytest.raises(KeyError):
        Task.from_dict(record)


def test_to_json_keeps_unicode():
    text = Task.create("Café 📋", created_at=NOW).to_json()
    assert "Café 📋" in text
    assert json.loads(text)["title"] == "Café 📋"


def test_short_id():
    task = Task.create("x", created_at=NOW)
    assert task.short_id == task.id.hex[:8]
    assert len(task.short_id) == 8


def test_equality_is_structural():
    task = Task.create("x", created_at=NOW.astimezone(UTC))
    assert task == dataclasses.replace(task)
    assert task != dataclasses.replace(task, title="y")
