"""Errors raised for caller mistakes at the scheduler boundary."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised for missing fields, malformed times, reversed ranges or bad indices."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class EventNotFoundError(InvalidInputError, IndexError):
    """Raised when a delete index does not address a scheduled event."""

    def __init__(self, index: int) -> None:
        super().__init__(f"No event at index {index}", field="index")
        self.index = index
