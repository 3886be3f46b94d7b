"""Service for recommending a free slot when a requested interval conflicts."""

from __future__ import annotations

from collections.abc import Sequence

from app.domain.models import Interval, WorkingWindow
from app.services.conflicts import find_conflict

SLOT_STEP_MINUTES = 15


def recommend_slot(
    candidate: Interval,
    window: WorkingWindow,
    existing_events: Sequence[Interval],
) -> Interval | None:
    """Return the earliest conflict-free slot with the candidate's duration.

    Offsets are scanned from ``window.start`` in fixed 15-minute steps while
    the slot still ends inside the window. Returns ``None`` when no grid
    offset is free. Gaps that only open between grid steps are not found.
    """
    duration = candidate.duration
    offset = window.start
    while offset + duration <= window.end:
        trial = Interval(title=candidate.title, start=offset, end=offset + duration)
        if find_conflict(trial, existing_events) is None:
            return trial
        offset += SLOT_STEP_MINUTES
    return None
