from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from ..attendance.repository import AttendanceRepository
from ..members.model import Member
from ..status_updates.repository import StatusUpdateRepository

logger = logging.getLogger(__name__)


@dataclass
class SeedOutcome:
    """Per-member results of one seeding pass over the roster."""

    table: str
    inserted: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.inserted) + len(self.skipped) + len(self.failed)


class PendingRowSeeder(ABC):
    """Template for seeding one pending row per member for a given day.

    A failing member is logged and skipped; the rest of the roster is
    still seeded. Nothing is retried within the cycle.
    """

    table: str = ""

    @abstractmethod
    def _insert(self, *, member_id: int, day: date) -> bool:
        raise NotImplementedError

    def seed(self, members: Sequence[Member], day: date) -> SeedOutcome:
        logger.debug("Seeding %s for %s (%d members)", self.table, day, len(members))
        outcome = SeedOutcome(table=self.table)

        for member in members:
            try:
                inserted = self._insert(member_id=member.member_id, day=day)
            except Exception as e:
                logger.error(
                    "Failed to insert %s for member ID: %s: %r",
                    self.table,
                    member.member_id,
                    e,
                )
                outcome.failed.append(member.member_id)
                continue

            if inserted:
                logger.debug("%s record added for member ID: %s", self.table, member.member_id)
                outcome.inserted.append(member.member_id)
            else:
                logger.debug("%s record already present for member ID: %s", self.table, member.member_id)
                outcome.skipped.append(member.member_id)

        return outcome


class AttendanceSeeder(PendingRowSeeder):
    table = "attendance"

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def _insert(self, *, member_id: int, day: date) -> bool:
        return self._attendance.insert_pending(member_id=member_id, day=day)


class StatusUpdateSeeder(PendingRowSeeder):
    table = "status_update_history"

    def __init__(self, status_updates: StatusUpdateRepository):
        self._status_updates = status_updates

    def _insert(self, *, member_id: int, day: date) -> bool:
        return self._status_updates.insert_pending(member_id=member_id, day=day)
