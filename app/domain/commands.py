"""Command interface between the presentation layer and the scheduler.

Commands take and return ``"HH:MM"`` strings, validate caller input, and
publish a domain event for every change or rejection.
"""

from __future__ import annotations

from app.domain.bus import EventBus
from app.domain.errors import InvalidInputError
from app.domain.events import (
    EventDeleted,
    EventRejected,
    EventScheduled,
    WorkingHoursChanged,
)
from app.domain.models import (
    AddEventResponse,
    AddEventResult,
    AddEventStatus,
    Interval,
    ScheduledEvent,
    TimelineEntry,
    TimeSlot,
    WorkingHours,
)
from app.domain.scheduler import IntervalScheduler
from app.repos.memory import TimelineRepository
from app.services.clock import minutes_to_time, parse_interval, time_to_minutes

OUT_OF_HOURS_MESSAGE = "Event is outside working hours"
NO_SLOT_MESSAGE = "No available time slots found within working hours."


def _slot(interval: Interval) -> TimeSlot:
    return TimeSlot(
        title=interval.title,
        start=minutes_to_time(interval.start),
        end=minutes_to_time(interval.end),
    )


def _describe(result: AddEventResult) -> str:
    if result.status == AddEventStatus.SUCCESS:
        event = _slot(result.event)
        return f'Scheduled "{event.title}" from {event.start} to {event.end}.'
    if result.status == AddEventStatus.OUT_OF_HOURS:
        return OUT_OF_HOURS_MESSAGE

    conflict = _slot(result.conflict_with)
    message = (
        f'There is a conflict with the event "{conflict.title}" '
        f"scheduled from {conflict.start} to {conflict.end}."
    )
    if result.recommendation is not None:
        rec = _slot(result.recommendation)
        message += f"\n\nRecommended time slot: {rec.start} to {rec.end}"
    else:
        message += f"\n\n{NO_SLOT_MESSAGE}"
    return message


class SchedulerCommands:
    """Entry points the presentation layer calls: submit, delete, reconfigure."""

    def __init__(
        self,
        scheduler: IntervalScheduler,
        bus: EventBus,
        timeline_repo: TimelineRepository,
    ) -> None:
        self.scheduler = scheduler
        self.bus = bus
        self.timeline_repo = timeline_repo

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def submit_event(
        self,
        title: str,
        start: str,
        end: str,
        accept_recommendation: bool = False,
    ) -> AddEventResponse:
        """Try to schedule an event.

        With *accept_recommendation*, a conflicting event that has a
        recommended slot is resubmitted at that slot straight away and the
        response carries ``rescheduled=True``.
        """
        if not title or not title.strip() or not start or not end:
            raise InvalidInputError("Please fill in all fields")

        candidate = parse_interval(title, start, end)
        result = self.scheduler.add_event(candidate)
        self._publish_result(result, candidate)

        if (
            result.status == AddEventStatus.CONFLICT
            and result.recommendation is not None
            and accept_recommendation
        ):
            retry = self.scheduler.add_event(result.recommendation)
            self._publish_result(retry, result.recommendation, rescheduled=True)
            return self._response(retry, rescheduled=retry.ok)

        return self._response(result)

    def request_delete(self, index: int) -> ScheduledEvent:
        removed = self.scheduler.delete_event(index)
        deleted = ScheduledEvent(index=index, **_slot(removed).model_dump())
        self.bus.publish(
            EventDeleted(
                index=index, title=deleted.title, start=deleted.start, end=deleted.end
            )
        )
        return deleted

    def reconfigure_hours(self, start: str, end: str) -> WorkingHours:
        if not start or not end:
            raise InvalidInputError("Please set both start and end working hours")

        window = self.scheduler.set_working_hours(
            time_to_minutes(start), time_to_minutes(end)
        )
        hours = WorkingHours(
            start=minutes_to_time(window.start), end=minutes_to_time(window.end)
        )
        self.bus.publish(WorkingHoursChanged(start=hours.start, end=hours.end))
        return hours

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_events(self) -> list[ScheduledEvent]:
        return [
            ScheduledEvent(index=index, **_slot(interval).model_dump())
            for index, interval in enumerate(self.scheduler.snapshot())
        ]

    def working_hours(self) -> WorkingHours:
        window = self.scheduler.window
        return WorkingHours(
            start=minutes_to_time(window.start), end=minutes_to_time(window.end)
        )

    def timeline(self) -> list[TimelineEntry]:
        return self.timeline_repo.list_all()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _response(
        self, result: AddEventResult, rescheduled: bool = False
    ) -> AddEventResponse:
        return AddEventResponse(
            status=result.status,
            event=_slot(result.event) if result.event else None,
            conflict_with=_slot(result.conflict_with) if result.conflict_with else None,
            recommendation=(
                _slot(result.recommendation) if result.recommendation else None
            ),
            rescheduled=rescheduled,
            message=_describe(result),
        )

    def _publish_result(
        self, result: AddEventResult, candidate: Interval, rescheduled: bool = False
    ) -> None:
        slot = _slot(candidate)
        if result.ok:
            self.bus.publish(
                EventScheduled(
                    title=slot.title,
                    start=slot.start,
                    end=slot.end,
                    rescheduled=rescheduled,
                )
            )
            return

        recommendation = None
        if result.recommendation is not None:
            rec = _slot(result.recommendation)
            recommendation = f"{rec.start}-{rec.end}"
        self.bus.publish(
            EventRejected(
                title=slot.title,
                start=slot.start,
                end=slot.end,
                reason=result.status,
                conflicting_title=(
                    result.conflict_with.title if result.conflict_with else None
                ),
                recommendation=recommendation,
            )
        )
