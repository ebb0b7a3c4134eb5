from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from types import ModuleType
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .constants import DEFAULT_DAILY_TASK_TIME, DEFAULT_TIMEZONE
from .exceptions import ConfigurationError


def parse_trigger_time(value: str | time | None) -> time:
    """Parse ``HH:MM[:SS]`` into a time of day; raise on anything else."""
    if value is None:
        return DEFAULT_DAILY_TASK_TIME
    if isinstance(value, time):
        return value

    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3):
        raise ConfigurationError(f"Invalid daily task time: {value!r} (expected HH:MM[:SS])")
    try:
        hh = int(parts[0])
        mm = int(parts[1])
        ss = int(parts[2]) if len(parts) == 3 else 0
        return time(hh, mm, ss)
    except ValueError as e:
        raise ConfigurationError(f"Invalid daily task time: {value!r} ({e})") from e


def load_timezone(name: str | None) -> ZoneInfo:
    name = (name or DEFAULT_TIMEZONE).strip()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown timezone: {name!r}") from e


@dataclass(frozen=True)
class DailyTaskSettings:
    """Startup-time timing configuration for the daily bootstrap."""

    timezone: ZoneInfo
    trigger_time: time

    @classmethod
    def from_module(cls, settings: ModuleType) -> "DailyTaskSettings":
        return cls(
            timezone=load_timezone(getattr(settings, "TIMEZONE", None)),
            trigger_time=parse_trigger_time(getattr(settings, "DAILY_TASK_TIME", None)),
        )
