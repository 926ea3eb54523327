"""Tests for the pure task rules in todaytodo.core.logic."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from todaytodo.core import logic
from todaytodo.core.models import Task

from conftest import NOW, UTC


# ---------------------------------------------------------------------------
# Day expiry
# ---------------------------------------------------------------------------


def test_start_of_day_is_midnight_in_zone():
    plus_two = timezone(timedelta(hours=2))
    start = logic.start_of_day(NOW, plus_two)

    assert start == datetime(2025, 2, 19, 0, 0, tzinfo=plus_two)
    assert (start.hour, start.minute, start.second, start.microsecond) == (0, 0, 0, 0)


def test_start_of_day_uses_zone_calendar():
    """23:30 UTC is already the next day at +02:00."""
    late = datetime(2025, 2, 19, 23, 30, tzinfo=UTC)
    start = logic.start_of_day(late, timezone(timedelta(hours=2)))

    assert start.date() == datetime(2025, 2, 20).date()


def test_day_filter_drops_yesterday_keeps_today(make_task):
    yesterday = make_task("Old", created=timedelta(days=-1))
    today = make_task("New", created=timedelta(hours=-1))

    kept = logic.filter_expired_day_tasks([yesterday, today], NOW, UTC)

    assert kept == [today]


def test_day_filter_keeps_task_created_exactly_at_midnight(make_task):
    midnight = make_task("Midnight", created=timedelta(hours=-12))
    just_before = make_task("Late", created=timedelta(hours=-12, microseconds=-1))

    kept = logic.filter_expired_day_tasks([just_before, midnight], NOW, UTC)

    assert kept == [midnight]


def test_day_filter_ignores_completion_and_expiry(make_task):
    done = make_task("Done", done=True)
    expired = make_task("Expired", expires=timedelta(hours=-2))

    kept = logic.filter_expired_day_tasks([done, expired], NOW, UTC)

    assert kept == [done, expired]


def test_day_filter_preserves_order_and_input(make_task):
    tasks = [make_task(f"T{i}", created=timedelta(hours=-i)) for i in range(1, 5)]
    original = list(tasks)

    kept = logic.filter_expired_day_tasks(tasks, NOW, UTC)

    assert kept == original
    assert tasks == original
    assert kept is not tasks


def test_day_filter_empty():
    assert logic.filter_expired_day_tasks([], NOW, UTC) == []


# ---------------------------------------------------------------------------
# Individual expiry
# ---------------------------------------------------------------------------


def test_individual_filter_keeps_tasks_without_expiry(make_task):
    task = make_task("No expiry")
    assert logic.filter_individually_expired([task], NOW) == [task]


def test_individual_filter_drops_past_keeps_future(make_task):
    past = make_task("Past", expires=timedelta(minutes=-1))
    future = make_task("Future", expires=timedelta(minutes=1))

    assert logic.filter_individually_expired([past, future], NOW) == [future]


def test_individual_filter_drops_task_expiring_exactly_now(make_task):
    """A task expires the instant expires_at is reached."""
    boundary = make_task("Boundary", expires=timedelta(0))
    assert logic.filter_individually_expired([boundary], NOW) == []


def test_individual_filter_ignores_completion(make_task):
    done_future = make_task("Done", expires=timedelta(hours=1), done=True)
    done_past = make_task("Done late", expires=timedelta(hours=-1), done=True)

    assert logic.filter_individually_expired([done_future, done_past], NOW) == [done_future]


@pytest.mark.parametrize("seed", range(10))
def test_filters_commute(seed):
    """Applying the two filters in either order gives the same collection."""
    rng = random.Random(seed)
    tasks = []
    for i in range(rng.randint(0, 25)):
        created = NOW - timedelta(minutes=rng.randint(0, 3 * 24 * 60))
        expires = None
        if rng.random() < 0.6:
            expires = NOW + timedelta(minutes=rng.randint(-6 * 60, 6 * 60))
        tasks.append(Task.create(f"Task {i}", created_at=created, expires_at=expires))

    day_first = logic.filter_individually_expired(
        logic.filter_expired_day_tasks(tasks, NOW, UTC), NOW
    )
    expiry_first = logic.filter_expired_day_tasks(
        logic.filter_individually_expired(tasks, NOW), NOW, UTC
    )

    assert day_first == expiry_first


# ---------------------------------------------------------------------------
# Toggle / append / submit
# ---------------------------------------------------------------------------


def test_toggle_flips_only_the_target(make_task):
    a, b, c = make_task("A"), make_task("B"), make_task("C")

    result = logic.toggle_task(b, [a, b, c])

    assert [t.title for t in result] == ["A", "B", "C"]
    assert [t.is_completed for t in result] == [False, True, False]
    assert not b.is_completed


def test_toggle_matches_by_id_only(make_task):
    """A stale copy of the task still finds the current one."""
    task = make_task("Current")
    current = logic.toggle_task(task, [task])

    result = logic.toggle_task(task, current)

    assert result[0].is_completed is False


def test_toggle_twice_restores_collection(make_task):
    tasks = [make_task("A"), make_task("B", done=True), make_task("C")]

    for target in tasks:
        once = logic.toggle_task(target, tasks)
        assert logic.toggle_task(target, once) == tasks


def test_toggle_missing_task_returns_none(make_task):
    outsider = make_task("Outsider")
    assert logic.toggle_task(outsider, [make_task("A")]) is None
    assert logic.toggle_task(outsider, []) is None


def test_append_adds_at_end_without_mutating(make_task):
    tasks = [make_task("A")]
    new = make_task("B")

    result = logic.append_task(tasks, new)

    assert result == [tasks[0], new]
    assert len(tasks) == 1


@pytest.mark.parametrize(
    "title,expected",
    [
        ("", False),
        ("   ", False),
        ("\n\t", False),
        ("x", True),
        (" a ", True),
        ("Café", True),
        ("📋 Reminder", True),
    ],
)
def test_can_submit(title, expected):
    assert logic.can_submit(title) is expected


# ---------------------------------------------------------------------------
# Time merge
# ---------------------------------------------------------------------------


def test_merge_time_with_today():
    picked = datetime(2000, 1, 1, 14, 30, 45, 123, tzinfo=UTC)
    today = datetime(2025, 2, 19, 9, 15, 7, tzinfo=UTC)

    merged = logic.merge_time_with_today(picked, UTC, today=today)

    assert merged == datetime(2025, 2, 19, 14, 30, tzinfo=UTC)


@pytest.mark.parametrize("minute_offset", [0, 1, 59, 61, 600, 1439])
def test_merge_always_zeroes_seconds(minute_offset):
    picked = NOW + timedelta(minutes=minute_offset, seconds=37, microseconds=999)

    merged = logic.merge_time_with_today(picked, UTC, today=NOW)

    assert merged.second == 0
    assert merged.microsecond == 0
    assert merged.date() == NOW.date()
    assert (merged.hour, merged.minute) == (picked.hour, picked.minute)


def test_merge_reads_components_in_zone():
    plus_two = timezone(timedelta(hours=2))
    picked = datetime(2025, 2, 19, 22, 45, tzinfo=UTC)  # 00:45 at +02:00

    merged = logic.merge_time_with_today(picked, plus_two, today=NOW)

    assert merged == datetime(2025, 2, 19, 0, 45, tzinfo=plus_two)


def test_merge_falls_back_to_today_on_overflow():
    today = datetime.max.replace(tzinfo=UTC)

    merged = logic.merge_time_with_today(NOW, timezone(timedelta(hours=2)), today=today)

    assert merged is today


# ---------------------------------------------------------------------------
# Day in the life
# ---------------------------------------------------------------------------


def test_four_task_scenario(make_task):
    """Yesterday's, expired, pending and done tasks under both rules."""
    stale = make_task("Yesterday", created=timedelta(days=-1))
    expired = make_task("Lunch call", expires=timedelta(minutes=-30))
    pending = make_task("Groceries", expires=timedelta(hours=4))
    done = make_task("Email", done=True)

    kept = logic.filter_individually_expired(
        logic.filter_expired_day_tasks([stale, expired, pending, done], NOW, UTC),
        NOW,
    )

    assert kept == [pending, done]
    after_toggle = logic.toggle_task(pending, kept)
    assert [t.is_completed for t in after_toggle] == [True, True]


# ---------------------------------------------------------------------------
# System zone across DST changes
# ---------------------------------------------------------------------------

# 2025-03-09 is the spring-forward day in US Eastern: 00:00 is EST (-05:00),
# the afternoon is EDT (-04:00).
SPRING_AFTERNOON = datetime(2025, 3, 9, 16, 0, tzinfo=UTC)


def test_start_of_day_uses_midnight_offset_on_dst_day(eastern_local_zone):
    start = logic.start_of_day(SPRING_AFTERNOON)

    assert start == datetime(2025, 3, 9, 5, 0, tzinfo=UTC)
    assert start.utcoffset() == timedelta(hours=-5)
    assert (start.hour, start.minute) == (0, 0)


def test_start_of_day_on_fall_back_day(eastern_local_zone):
    start = logic.start_of_day(datetime(2025, 11, 2, 20, 0, tzinfo=UTC))

    assert start == datetime(2025, 11, 2, 4, 0, tzinfo=UTC)
    assert start.utcoffset() == timedelta(hours=-4)


def test_day_filter_on_dst_day(eastern_local_zone):
    late_yesterday = Task.create("Late", created_at=datetime(2025, 3, 9, 4, 30, tzinfo=UTC))
    midnight = Task.create("Midnight", created_at=datetime(2025, 3, 9, 5, 0, tzinfo=UTC))

    kept = logic.filter_expired_day_tasks([late_yesterday, midnight], SPRING_AFTERNOON)

    assert kept == [midnight]


def test_merge_uses_offset_of_picked_time_on_dst_day(eastern_local_zone):
    picked = datetime(2025, 3, 9, 18, 30, tzinfo=UTC)  # 14:30 EDT
    early = datetime(2025, 3, 9, 6, 0, tzinfo=UTC)  # 01:00 EST

    merged = logic.merge_time_with_today(picked, today=early)

    assert merged == picked
    assert (merged.hour, merged.minute) == (14, 30)
    assert merged.utcoffset() == timedelta(hours=-4)


def test_wall_clock():
    naive = datetime(2025, 2, 19, 9, 0)
    assert logic.wall_clock(naive, UTC) == datetime(2025, 2, 19, 9, 0, tzinfo=UTC)
    assert logic.wall_clock(naive).tzinfo is not None
