"""Domain event handlers — record the activity timeline and log it."""

from __future__ import annotations

import logging

from app.domain.bus import EventBus
from app.domain.events import (
    EventDeleted,
    EventRejected,
    EventScheduled,
    WorkingHoursChanged,
)
from app.domain.models import AddEventStatus, TimelineEntry, TimelineEntryType
from app.repos.memory import TimelineRepository

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Wires domain-event handlers to the bus with access to the timeline."""

    def __init__(self, bus: EventBus, timeline_repo: TimelineRepository) -> None:
        self.bus = bus
        self.timeline_repo = timeline_repo
        self._register()

    def _register(self) -> None:
        self.bus.subscribe(EventScheduled, self.on_event_scheduled)
        self.bus.subscribe(EventRejected, self.on_event_rejected)
        self.bus.subscribe(EventDeleted, self.on_event_deleted)
        self.bus.subscribe(WorkingHoursChanged, self.on_working_hours_changed)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def on_event_scheduled(self, event: EventScheduled) -> None:
        logger.info(
            "Scheduled '%s' %s-%s%s",
            event.title,
            event.start,
            event.end,
            " (recommended slot)" if event.rescheduled else "",
        )
        self.timeline_repo.add(
            TimelineEntry(
                type=TimelineEntryType.SCHEDULED,
                title=event.title,
                payload={
                    "start": event.start,
                    "end": event.end,
                    "rescheduled": event.rescheduled,
                },
            )
        )

    def on_event_rejected(self, event: EventRejected) -> None:
        if event.reason == AddEventStatus.OUT_OF_HOURS:
            logger.warning(
                "Rejected '%s' %s-%s: outside working hours",
                event.title,
                event.start,
                event.end,
            )
        else:
            logger.warning(
                "Rejected '%s' %s-%s: conflicts with '%s', recommendation %s",
                event.title,
                event.start,
                event.end,
                event.conflicting_title,
                event.recommendation or "none",
            )

        payload = {"start": event.start, "end": event.end, "reason": event.reason}
        if event.conflicting_title is not None:
            payload["conflicting_title"] = event.conflicting_title
        if event.recommendation is not None:
            payload["recommendation"] = event.recommendation
        self.timeline_repo.add(
            TimelineEntry(
                type=TimelineEntryType.REJECTED, title=event.title, payload=payload
            )
        )

    def on_event_deleted(self, event: EventDeleted) -> None:
        logger.info(
            "Deleted '%s' %s-%s at index %d",
            event.title,
            event.start,
            event.end,
            event.index,
        )
        self.timeline_repo.add(
            TimelineEntry(
                type=TimelineEntryType.DELETED,
                title=event.title,
                payload={"index": event.index, "start": event.start, "end": event.end},
            )
        )

    def on_working_hours_changed(self, event: WorkingHoursChanged) -> None:
        logger.info("Working hours set to %s-%s", event.start, event.end)
        self.timeline_repo.add(
            TimelineEntry(
                type=TimelineEntryType.WORKING_HOURS_CHANGED,
                payload={"start": event.start, "end": event.end},
            )
        )
