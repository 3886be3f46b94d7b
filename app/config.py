"""Service settings read from ``SCHEDULER_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, field_validator, model_validator

from app.services.clock import time_to_minutes

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseModel):
    title: str = "Day Scheduler Service"
    work_start: str = "09:00"
    work_end: str = "17:00"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}")
        return level

    @model_validator(mode="after")
    def _window_in_order(self) -> Settings:
        if time_to_minutes(self.work_end) <= time_to_minutes(self.work_start):
            raise ValueError("work_end must be after work_start")
        return self

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        values = {
            "title": env.get("SCHEDULER_TITLE"),
            "work_start": env.get("SCHEDULER_WORK_START"),
            "work_end": env.get("SCHEDULER_WORK_END"),
            "log_level": env.get("SCHEDULER_LOG_LEVEL"),
        }
        return cls(**{k: v for k, v in values.items() if v})
