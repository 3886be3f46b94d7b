"""Domain events emitted by scheduler commands."""

from __future__ import annotations

from pydantic import BaseModel

from app.domain.models import AddEventStatus


class EventScheduled(BaseModel):
    """Fired when an interval is stored in the schedule."""

    title: str
    start: str
    end: str
    rescheduled: bool = False


class EventRejected(BaseModel):
    """Fired when an add is refused for being out of hours or conflicting."""

    title: str
    start: str
    end: str
    reason: AddEventStatus
    conflicting_title: str | None = None
    recommendation: str | None = None


class EventDeleted(BaseModel):
    index: int
    title: str
    start: str
    end: str


class WorkingHoursChanged(BaseModel):
    start: str
    end: str
