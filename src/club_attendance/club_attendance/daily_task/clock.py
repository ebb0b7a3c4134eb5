from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from ..common.datetime_utils import now_in
from ..core.exceptions import ConfigurationError


def localize(day: date, at: time, tz: ZoneInfo) -> datetime:
    """Build ``day`` at wall-clock ``at`` in ``tz``.

    Raises ConfigurationError when that wall-clock time is ambiguous
    (clocks fall back) or does not exist (clocks spring forward).
    """
    candidate = datetime.combine(day, at, tzinfo=tz)
    if candidate.utcoffset() == candidate.replace(fold=1).utcoffset():
        return candidate

    round_trip = candidate.astimezone(timezone.utc).astimezone(tz)
    if round_trip.replace(tzinfo=None) != candidate.replace(tzinfo=None):
        raise ConfigurationError(f"{candidate.replace(tzinfo=None)} does not exist in {tz.key}")
    raise ConfigurationError(f"{candidate.replace(tzinfo=None)} is ambiguous in {tz.key}")


class DailyTriggerClock:
    """Works out when the next daily trigger fires in a fixed timezone."""

    def __init__(
        self,
        tz: ZoneInfo,
        trigger_time: time,
        *,
        now_fn: Optional[Callable[[ZoneInfo], datetime]] = None,
    ):
        self._tz = tz
        self._trigger_time = trigger_time
        self._now_fn = now_fn or now_in

    @property
    def timezone(self) -> ZoneInfo:
        return self._tz

    def now(self) -> datetime:
        return self._now_fn(self._tz).astimezone(self._tz)

    def today(self) -> date:
        return self.now().date()

    def next_trigger(self, now: Optional[datetime] = None) -> datetime:
        """Today's trigger if it is still ahead of ``now``, else tomorrow's.

        Tomorrow is a civil day (date + 1, then localized), not now + 24h.
        """
        now = (now or self.now()).astimezone(self._tz)
        today_trigger = localize(now.date(), self._trigger_time, self._tz)
        if today_trigger > now:
            return today_trigger
        return localize(now.date() + timedelta(days=1), self._trigger_time, self._tz)

    def seconds_until(self, target: datetime, now: Optional[datetime] = None) -> int:
        """Whole seconds from ``now`` to ``target``, never negative."""
        now = now or self.now()
        return max(0, int((target - now).total_seconds()))

    def seconds_until_next(self, now: Optional[datetime] = None) -> int:
        now = (now or self.now()).astimezone(self._tz)
        return self.seconds_until(self.next_trigger(now), now)
