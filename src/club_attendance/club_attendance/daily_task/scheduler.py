from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from apscheduler.schedulers.base import BaseScheduler
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.date import DateTrigger

from ..core.exceptions import ConfigurationError
from .clock import DailyTriggerClock
from .service import DailyBootstrapService

logger = logging.getLogger(__name__)

JOB_ID = "daily_bootstrap"


class DailyScheduler:
    """Run the bootstrap once per day at the clock's trigger time.

    Each run re-arms a one-shot DateTrigger at the next trigger the clock
    computes, strictly after the one that just fired. A failed cycle is
    logged and the next one is always armed. A ConfigurationError from the
    clock stops the scheduler and is raised from ``run_forever``.
    """

    def __init__(
        self,
        clock: DailyTriggerClock,
        bootstrap: DailyBootstrapService,
        *,
        scheduler: Optional[BaseScheduler] = None,
    ):
        self._clock = clock
        self._bootstrap = bootstrap
        self._scheduler = scheduler or BlockingScheduler(timezone=clock.timezone.key)
        self._last_trigger: Optional[datetime] = None
        self._stopped = False
        self._fatal: Optional[ConfigurationError] = None

    def stop(self) -> None:
        self._stopped = True
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    def run_forever(self) -> None:
        if self._stopped:
            logger.info("Daily scheduler stopped")
            return

        self._arm()
        self._scheduler.start()

        if self._fatal is not None:
            raise self._fatal
        logger.info("Daily scheduler stopped")

    def _arm(self) -> datetime:
        now = self._clock.now()
        # Never before the last fired trigger, even if we woke a bit early.
        after = max(now, self._last_trigger) if self._last_trigger else now
        trigger = self._clock.next_trigger(after)
        logger.debug("next trigger: %s", trigger.isoformat())
        logger.info("Sleeping for %d seconds", self._clock.seconds_until(trigger, now))

        self._scheduler.add_job(
            self._fire,
            trigger=DateTrigger(run_date=trigger),
            args=[trigger],
            id=JOB_ID,
            replace_existing=True,
            misfire_grace_time=None,
            coalesce=True,
        )
        return trigger

    def _fire(self, trigger: datetime) -> None:
        self._last_trigger = trigger
        if self._stopped:
            return

        self.run_once(trigger.date())

        if self._stopped:
            return
        try:
            self._arm()
        except ConfigurationError as e:
            logger.critical("Cannot schedule the next daily bootstrap: %s", e)
            self._fatal = e
            self._stopped = True
            self._scheduler.shutdown(wait=False)

    def run_once(self, today: Optional[date] = None) -> None:
        today = today or self._clock.today()
        logger.info("Starting daily bootstrap for %s", today)
        try:
            self._bootstrap.execute(today)
        except Exception:
            logger.exception("Daily bootstrap for %s failed", today)
        else:
            logger.info("Daily bootstrap for %s finished", today)
