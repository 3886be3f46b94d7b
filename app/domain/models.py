"""Domain models for the day scheduler."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, computed_field, model_validator

try:
    from enum import StrEnum
except ImportError:  # pragma: no cover - fallback for older Python runtimes

    class StrEnum(str, Enum):
        pass


MINUTES_PER_DAY = 24 * 60

DEFAULT_WORK_START = 9 * 60
DEFAULT_WORK_END = 17 * 60


class AddEventStatus(StrEnum):
    SUCCESS = "success"
    OUT_OF_HOURS = "out_of_hours"
    CONFLICT = "conflict"


class TimelineEntryType(StrEnum):
    SCHEDULED = "scheduled"
    REJECTED = "rejected"
    DELETED = "deleted"
    WORKING_HOURS_CHANGED = "working_hours_changed"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Core domain models
# ---------------------------------------------------------------------------


class Interval(BaseModel):
    """A titled time range in minutes since midnight, half-open ``[start, end)``."""

    title: str
    start: int = Field(ge=0, lt=MINUTES_PER_DAY)
    end: int = Field(gt=0, le=MINUTES_PER_DAY)

    @model_validator(mode="after")
    def _end_after_start(self) -> Interval:
        if self.end <= self.start:
            raise ValueError("end must be after start")
        return self

    @property
    def duration(self) -> int:
        return self.end - self.start


class WorkingWindow(BaseModel):
    # Chronology is checked by IntervalScheduler.set_working_hours, not here.
    start: int = Field(default=DEFAULT_WORK_START, ge=0, lt=MINUTES_PER_DAY)
    end: int = Field(default=DEFAULT_WORK_END, gt=0, le=MINUTES_PER_DAY)

    def contains(self, interval: Interval) -> bool:
        return interval.start >= self.start and interval.end <= self.end


class AddEventResult(BaseModel):
    """Outcome of ``IntervalScheduler.add_event``.

    ``conflict_with`` and ``recommendation`` are only set on a conflict;
    a conflict with no recommendation means the window has no free slot
    of the requested duration.
    """

    status: AddEventStatus
    event: Interval | None = None
    conflict_with: Interval | None = None
    recommendation: Interval | None = None

    @property
    def ok(self) -> bool:
        return self.status == AddEventStatus.SUCCESS


class TimelineEntry(BaseModel):
    id: str = Field(default_factory=_new_id)
    timestamp: datetime = Field(default_factory=_utcnow)
    type: TimelineEntryType
    title: str | None = None
    payload: dict = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class AddEventRequest(BaseModel):
    title: str
    start: str
    end: str
    accept_recommendation: bool = False


class WorkingHours(BaseModel):
    start: str
    end: str


class ScheduledEvent(BaseModel):
    index: int
    title: str
    start: str
    end: str


class TimeSlot(BaseModel):
    title: str
    start: str
    end: str


class AddEventResponse(BaseModel):
    status: AddEventStatus
    event: TimeSlot | None = None
    conflict_with: TimeSlot | None = None
    recommendation: TimeSlot | None = None
    rescheduled: bool = False
    message: str = ""

    @computed_field
    @property
    def success(self) -> bool:
        return self.status == AddEventStatus.SUCCESS
