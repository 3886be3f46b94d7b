"""In-process dispatch of scheduler domain events to their handlers."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DomainEventHandler = Callable[[BaseModel], None]


class EventBus:
    """Routes each domain event to the handlers registered for its exact class.

    Dispatch is synchronous: ``publish`` returns only after every handler has
    run, so timeline entries exist by the time a command returns.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[BaseModel], list[DomainEventHandler]] = (
            defaultdict(list)
        )

    def subscribe(
        self, event_type: type[BaseModel], handler: DomainEventHandler
    ) -> None:
        self._handlers[event_type].append(handler)

    def publish(self, event: BaseModel) -> None:
        handlers = self._handlers.get(type(event), [])
        if not handlers:
            logger.debug("No handlers for %s", type(event).__name__)
            return
        logger.debug(
            "Dispatching %s to %d handler(s)", type(event).__name__, len(handlers)
        )
        for handler in handlers:
            handler(event)
