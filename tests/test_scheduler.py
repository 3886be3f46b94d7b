"""Tests for IntervalScheduler add/delete/reconfigure behaviour."""

from __future__ import annotations

import sys
import threading

import pytest

from app.domain.errors import EventNotFoundError, InvalidInputError
from app.domain.models import AddEventStatus, Interval, WorkingWindow
from app.domain.scheduler import IntervalScheduler
from app.repos.memory import IntervalRepository
from app.services.clock import parse_interval


@pytest.fixture()
def scheduler() -> IntervalScheduler:
    return IntervalScheduler()


def _iv(title: str, start: str, end: str) -> Interval:
    return parse_interval(title, start, end)


def _starts(scheduler: IntervalScheduler) -> list[int]:
    return [i.start for i in scheduler.snapshot()]


# ---------------------------------------------------------------------------
# add_event
# ---------------------------------------------------------------------------


def test_default_window_is_nine_to_five(scheduler):
    assert scheduler.window == WorkingWindow(start=540, end=1020)


def test_add_success_then_conflict_with_recommendation(scheduler):
    assert scheduler.add_event(_iv("Meeting", "10:00", "11:00")).ok

    result = scheduler.add_event(_iv("Sync", "10:30", "11:00"))

    assert result.status == AddEventStatus.CONFLICT
    assert result.conflict_with.title == "Meeting"
    # Grid search starts at the window start, so 09:00 is the first free slot.
    assert (result.recommendation.start, result.recommendation.end) == (540, 570)
    assert result.recommendation.title == "Sync"
    assert len(scheduler.snapshot()) == 1


def test_recommendation_skips_booked_morning(scheduler):
    scheduler.add_event(_iv("Standup", "09:00", "10:00"))
    scheduler.add_event(_iv("Meeting", "10:00", "11:00"))

    result = scheduler.add_event(_iv("Sync", "10:30", "11:00"))

    assert (result.recommendation.start, result.recommendation.end) == (660, 690)


def test_full_window_conflict_has_no_recommendation():
    scheduler = IntervalScheduler(window=WorkingWindow(start=540, end=600))
    assert scheduler.add_event(_iv("Long", "09:00", "10:00")).ok

    result = scheduler.add_event(_iv("Extra", "09:15", "09:45"))

    assert result.status == AddEventStatus.CONFLICT
    assert result.conflict_with.title == "Long"
    assert result.recommendation is None


def test_out_of_hours(scheduler):
    result = scheduler.add_event(_iv("Early", "08:00", "08:30"))
    assert result.status == AddEventStatus.OUT_OF_HOURS
    assert result.conflict_with is None
    assert scheduler.snapshot() == []


@pytest.mark.parametrize(
    "start, end, ok",
    [
        ("09:00", "17:00", True),
        ("08:59", "09:30", False),
        ("16:30", "17:01", False),
        ("16:45", "17:00", True),
    ],
)
def test_window_containment_is_inclusive(scheduler, start, end, ok):
    result = scheduler.add_event(_iv("Edge", start, end))
    assert result.ok is ok


def test_adjacent_events_both_schedule(scheduler):
    assert scheduler.add_event(_iv("A", "09:00", "10:00")).ok
    assert scheduler.add_event(_iv("B", "10:00", "11:00")).ok
    assert scheduler.add_event(_iv("C", "08:30", "09:00")).status == (
        AddEventStatus.OUT_OF_HOURS
    )


def test_rejections_do_not_mutate(scheduler):
    scheduler.add_event(_iv("Meeting", "10:00", "11:00"))
    before = scheduler.snapshot()

    scheduler.add_event(_iv("Overlap", "10:15", "10:45"))
    scheduler.add_event(_iv("Late", "16:30", "18:00"))

    assert scheduler.snapshot() == before


def test_success_keeps_schedule_sorted(scheduler):
    for title, start, end in [
        ("Afternoon", "14:00", "15:00"),
        ("Morning", "09:00", "09:30"),
        ("Noon", "12:00", "12:30"),
    ]:
        size = len(scheduler.snapshot())
        assert scheduler.add_event(_iv(title, start, end)).ok
        assert len(scheduler.snapshot()) == size + 1
        assert _starts(scheduler) == sorted(_starts(scheduler))

    assert [i.title for i in scheduler.snapshot()] == ["Morning", "Noon", "Afternoon"]


def test_snapshot_is_a_copy(scheduler):
    scheduler.add_event(_iv("Meeting", "10:00", "11:00"))
    scheduler.snapshot().clear()
    assert len(scheduler.snapshot()) == 1


def test_check_conflict_and_recommend_are_read_only(scheduler):
    scheduler.add_event(_iv("Meeting", "09:00", "10:00"))
    candidate = _iv("Candidate", "09:30", "10:30")

    assert scheduler.check_conflict(candidate).title == "Meeting"
    assert scheduler.recommend(candidate).start == 600
    assert len(scheduler.snapshot()) == 1


# ---------------------------------------------------------------------------
# delete_event
# ---------------------------------------------------------------------------


def test_delete_index_zero_removes_earliest(scheduler):
    scheduler.add_event(_iv("Second", "13:00", "14:00"))
    scheduler.add_event(_iv("First", "09:00", "10:00"))

    removed = scheduler.delete_event(0)

    assert removed.title == "First"
    assert [i.title for i in scheduler.snapshot()] == ["Second"]


@pytest.mark.parametrize("index", [-1, 1, 5])
def test_delete_out_of_range_raises_and_keeps_schedule(scheduler, index):
    scheduler.add_event(_iv("Only", "09:00", "10:00"))

    with pytest.raises(EventNotFoundError):
        scheduler.delete_event(index)

    assert len(scheduler.snapshot()) == 1


# ---------------------------------------------------------------------------
# set_working_hours
# ---------------------------------------------------------------------------


def test_set_working_hours_changes_containment(scheduler):
    scheduler.set_working_hours(7 * 60, 12 * 60)

    assert scheduler.add_event(_iv("Early", "07:00", "08:00")).ok
    assert scheduler.add_event(_iv("Late", "16:00", "16:30")).status == (
        AddEventStatus.OUT_OF_HOURS
    )


def test_narrowing_window_keeps_existing_events(scheduler):
    scheduler.add_event(_iv("Afternoon", "15:00", "16:00"))

    scheduler.set_working_hours(9 * 60, 12 * 60)

    assert [i.title for i in scheduler.snapshot()] == ["Afternoon"]


def test_set_working_hours_rejects_reversed_range(scheduler):
    with pytest.raises(InvalidInputError):
        scheduler.set_working_hours(12 * 60, 9 * 60)
    assert scheduler.window == WorkingWindow()


# ---------------------------------------------------------------------------
# sort_events
# ---------------------------------------------------------------------------


def test_sort_events_orders_by_start():
    repo = IntervalRepository()
    repo._items.extend(
        [
            Interval(title="Late", start=900, end=960),
            Interval(title="Early", start=540, end=600),
            Interval(title="Noon", start=720, end=750),
        ]
    )
    scheduler = IntervalScheduler(repo=repo)

    scheduler.sort_events()

    assert [i.title for i in scheduler.snapshot()] == ["Early", "Noon", "Late"]


def test_sort_keeps_insertion_order_on_equal_starts():
    """Equal starts imply overlap, so add_event never stores them; the repo
    is loaded directly here to pin down the tie-break on its own."""
    repo = IntervalRepository()
    repo._items.extend(
        [
            Interval(title="Late", start=900, end=960),
            Interval(title="Tie A", start=600, end=630),
            Interval(title="Tie B", start=600, end=660),
        ]
    )

    repo.sort()

    assert [i.title for i in repo.list_all()] == ["Tie A", "Tie B", "Late"]


# ---------------------------------------------------------------------------
# Concurrent readers
# ---------------------------------------------------------------------------


def test_readers_never_see_a_partial_schedule():
    """Snapshots and conflict checks stay whole while another thread re-sorts."""
    scheduler = IntervalScheduler(window=WorkingWindow(start=0, end=1440))
    for k in reversed(range(700)):
        interval = Interval(title=f"E{k}", start=2 * k, end=2 * k + 1)
        assert scheduler.add_event(interval).ok
    first_minute = Interval(title="First minute", start=0, end=1)

    stop = threading.Event()

    def resort() -> None:
        while not stop.is_set():
            scheduler.sort_events()

    old_interval = sys.getswitchinterval()
    sys.setswitchinterval(1e-6)
    writer = threading.Thread(target=resort)
    writer.start()
    try:
        seen = [
            (len(scheduler.snapshot()), scheduler.check_conflict(first_minute))
            for _ in range(500)
        ]
    finally:
        stop.set()
        writer.join()
        sys.setswitchinterval(old_interval)

    assert all(size == 700 for size, _ in seen)
    assert all(conflict is not None and conflict.start == 0 for _, conflict in seen)
