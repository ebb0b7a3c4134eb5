from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..members.model import Member
from ..members.repository import MemberRepository
from .seeders import PendingRowSeeder, SeedOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootstrapResult:
    day: date
    roster_size: int
    outcomes: dict[str, Optional[SeedOutcome]]
    roster_error: Optional[str] = None

    @property
    def aborted(self) -> bool:
        return self.roster_error is not None


class DailyBootstrapService:
    """Seeds today's pending rows for every member of a fresh roster.

    The roster is fetched on every run so new and removed members are
    picked up by the next cycle. Seeders run side by side on the same
    snapshot and are joined for completion only: one crashing never stops
    the other.
    """

    def __init__(self, members: MemberRepository, seeders: Sequence[PendingRowSeeder]):
        self._members = members
        self._seeders = list(seeders)

    def execute(self, today: date) -> BootstrapResult:
        try:
            roster = list(self._members.fetch_all())
        except Exception as e:
            logger.error("Failed to fetch members: %r", e)
            return BootstrapResult(
                day=today,
                roster_size=0,
                outcomes={s.table: None for s in self._seeders},
                roster_error=repr(e),
            )

        logger.info("Seeding %d members for %s", len(roster), today)
        outcomes = self._run_seeders(roster, today)

        for table, outcome in outcomes.items():
            if outcome is None:
                continue
            logger.info(
                "%s on %s: %d inserted, %d already present, %d failed",
                table,
                today,
                len(outcome.inserted),
                len(outcome.skipped),
                len(outcome.failed),
            )

        return BootstrapResult(day=today, roster_size=len(roster), outcomes=outcomes)

    def _run_seeders(self, roster: list[Member], today: date) -> dict[str, Optional[SeedOutcome]]:
        outcomes: dict[str, Optional[SeedOutcome]] = {}
        if not self._seeders:
            return outcomes

        with ThreadPoolExecutor(max_workers=len(self._seeders), thread_name_prefix="seeder") as pool:
            futures = {s.table: pool.submit(s.seed, roster, today) for s in self._seeders}

            for table, future in futures.items():
                try:
                    outcomes[table] = future.result()
                except Exception:
                    logger.exception("Seeder for %s crashed on %s", table, today)
                    outcomes[table] = None

        return outcomes
