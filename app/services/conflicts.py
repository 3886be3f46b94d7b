"""Service for detecting scheduling conflicts between intervals."""

from __future__ import annotations

from collections.abc import Iterable

from app.domain.models import Interval


def overlaps(existing: Interval, candidate: Interval) -> bool:
    """Return True when *candidate* collides with *existing*.

    Conflict if the candidate starts inside ``[existing.start, existing.end)``,
    ends inside ``(existing.start, existing.end]``, or covers the existing
    interval entirely. Exact boundary touches (end == start) are NOT conflicts.
    """
    return (
        (existing.start <= candidate.start < existing.end)
        or (existing.start < candidate.end <= existing.end)
        or (candidate.start <= existing.start and candidate.end >= existing.end)
    )


def find_conflict(
    candidate: Interval, existing_events: Iterable[Interval]
) -> Interval | None:
    """Return the first existing interval, in iteration order, that conflicts."""
    for event in existing_events:
        if overlaps(event, candidate):
            return event
    return None
