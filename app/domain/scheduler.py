"""Single-day interval scheduler bounded by a working-hours window."""

from __future__ import annotations

import threading

from app.domain.errors import InvalidInputError
from app.domain.models import (
    AddEventResult,
    AddEventStatus,
    Interval,
    WorkingWindow,
)
from app.repos.memory import IntervalRepository
from app.services.conflicts import find_conflict
from app.services.recommend import recommend_slot


class IntervalScheduler:
    """Owns the working window and a schedule of non-overlapping intervals.

    Every call runs under one lock so the no-overlap invariant holds and
    readers never see a half-updated schedule across request threads.
    """

    def __init__(
        self,
        window: WorkingWindow | None = None,
        repo: IntervalRepository | None = None,
    ) -> None:
        self.window = window if window is not None else WorkingWindow()
        self.repo = repo if repo is not None else IntervalRepository()
        self._lock = threading.Lock()

    def add_event(self, candidate: Interval) -> AddEventResult:
        """Store *candidate* if it fits the window and collides with nothing.

        Nothing is stored on an ``out_of_hours`` or ``conflict`` outcome, even
        when a recommendation is returned; callers resubmit at the
        recommended time.
        """
        with self._lock:
            if not self.window.contains(candidate):
                return AddEventResult(status=AddEventStatus.OUT_OF_HOURS)

            conflict = find_conflict(candidate, self.repo)
            if conflict is not None:
                return AddEventResult(
                    status=AddEventStatus.CONFLICT,
                    conflict_with=conflict,
                    recommendation=recommend_slot(
                        candidate, self.window, self.repo.list_all()
                    ),
                )

            self.repo.add(candidate)
            return AddEventResult(status=AddEventStatus.SUCCESS, event=candidate)

    def check_conflict(self, candidate: Interval) -> Interval | None:
        with self._lock:
            return find_conflict(candidate, self.repo)

    def recommend(self, candidate: Interval) -> Interval | None:
        with self._lock:
            return recommend_slot(candidate, self.window, self.repo.list_all())

    def delete_event(self, index: int) -> Interval:
        """Remove and return the interval at *index* in start order."""
        with self._lock:
            return self.repo.delete(index)

    def set_working_hours(self, start: int, end: int) -> WorkingWindow:
        """Replace the window. Stored intervals are not re-checked or evicted."""
        if end <= start:
            raise InvalidInputError("End time must be after start time", field="end")
        with self._lock:
            self.window = WorkingWindow(start=start, end=end)
            return self.window

    def sort_events(self) -> None:
        with self._lock:
            self.repo.sort()

    def snapshot(self) -> list[Interval]:
        with self._lock:
            return self.repo.list_all()
