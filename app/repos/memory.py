"""In-memory repositories for scheduled intervals and the activity timeline."""

from __future__ import annotations

from app.domain.errors import EventNotFoundError
from app.domain.models import Interval, TimelineEntry, TimelineEntryType


class IntervalRepository:
    """List-backed store for Interval instances, kept sorted by start."""

    def __init__(self) -> None:
        self._items: list[Interval] = []

    def __iter__(self):
        return iter(self._items)

    def add(self, interval: Interval) -> None:
        self._items = sorted([*self._items, interval], key=lambda i: i.start)

    def sort(self) -> None:
        # Swap in a sorted copy; sorted() is stable, so equal starts keep
        # insertion order and iterating readers never see an emptied list.
        self._items = sorted(self._items, key=lambda i: i.start)

    def list_all(self) -> list[Interval]:
        return list(self._items)

    def delete(self, index: int) -> Interval:
        if not 0 <= index < len(self._items):
            raise EventNotFoundError(index)
        items = list(self._items)
        removed = items.pop(index)
        self._items = items
        return removed


class TimelineRepository:
    """List-backed store for TimelineEntry instances."""

    def __init__(self) -> None:
        self._entries: list[TimelineEntry] = []

    def add(self, entry: TimelineEntry) -> None:
        self._entries.append(entry)

    def list_all(self) -> list[TimelineEntry]:
        return sorted(self._entries, key=lambda e: e.timestamp)

    def list_by_type(self, entry_type: TimelineEntryType) -> list[TimelineEntry]:
        return [e for e in self.list_all() if e.type == entry_type]
