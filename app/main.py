"""FastAPI application — entry point for the day scheduler service."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Request

from app.config import Settings
from app.domain.bus import EventBus
from app.domain.commands import SchedulerCommands
from app.domain.errors import EventNotFoundError, InvalidInputError
from app.domain.handlers import HandlerRegistry
from app.domain.models import (
    AddEventRequest,
    AddEventResponse,
    ScheduledEvent,
    TimelineEntry,
    WorkingHours,
    WorkingWindow,
)
from app.domain.scheduler import IntervalScheduler
from app.repos.memory import TimelineRepository
from app.services.clock import time_to_minutes

logger = logging.getLogger(__name__)


def build_commands(
    settings: Settings, scheduler: IntervalScheduler | None = None
) -> SchedulerCommands:
    """Wire a scheduler, bus, timeline and handlers into one command object."""
    if scheduler is None:
        scheduler = IntervalScheduler(
            window=WorkingWindow(
                start=time_to_minutes(settings.work_start),
                end=time_to_minutes(settings.work_end),
            )
        )
    bus = EventBus()
    timeline_repo = TimelineRepository()
    HandlerRegistry(bus=bus, timeline_repo=timeline_repo)
    return SchedulerCommands(scheduler=scheduler, bus=bus, timeline_repo=timeline_repo)


def get_commands(request: Request) -> SchedulerCommands:
    return request.app.state.commands


def create_app(
    settings: Settings | None = None, scheduler: IntervalScheduler | None = None
) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title=settings.title)
    app.state.settings = settings
    app.state.commands = build_commands(settings, scheduler)
    logger.info(
        "Scheduler ready, working hours %s-%s", settings.work_start, settings.work_end
    )

    # ── Routes ──────────────────────────────────────────────────────────

    @app.get("/events", response_model=list[ScheduledEvent])
    def list_events(
        commands: SchedulerCommands = Depends(get_commands),
    ) -> list[ScheduledEvent]:
        """Return the schedule in start order."""
        return commands.list_events()

    @app.post("/events", response_model=AddEventResponse)
    def submit_event(
        payload: AddEventRequest,
        commands: SchedulerCommands = Depends(get_commands),
    ) -> AddEventResponse:
        """Try to schedule an event; conflicts come back with a recommendation."""
        try:
            return commands.submit_event(
                payload.title,
                payload.start,
                payload.end,
                accept_recommendation=payload.accept_recommendation,
            )
        except InvalidInputError as exc:
            raise HTTPException(status_code=422, detail=exc.message) from exc

    @app.delete("/events/{index}", response_model=ScheduledEvent)
    def delete_event(
        index: int,
        commands: SchedulerCommands = Depends(get_commands),
    ) -> ScheduledEvent:
        """Delete the event at *index* in the current start order."""
        try:
            return commands.request_delete(index)
        except EventNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Event not found") from exc

    @app.get("/working-hours", response_model=WorkingHours)
    def get_working_hours(
        commands: SchedulerCommands = Depends(get_commands),
    ) -> WorkingHours:
        return commands.working_hours()

    @app.put("/working-hours", response_model=WorkingHours)
    def set_working_hours(
        payload: WorkingHours,
        commands: SchedulerCommands = Depends(get_commands),
    ) -> WorkingHours:
        """Replace the working window. Existing events are left in place."""
        try:
            return commands.reconfigure_hours(payload.start, payload.end)
        except InvalidInputError as exc:
            raise HTTPException(status_code=422, detail=exc.message) from exc

    @app.get("/timeline", response_model=list[TimelineEntry])
    def list_timeline(
        commands: SchedulerCommands = Depends(get_commands),
    ) -> list[TimelineEntry]:
        """Return scheduling activity in the order it happened."""
        return commands.timeline()

    return app


app = create_app()
