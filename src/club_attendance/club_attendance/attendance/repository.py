from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceRecord, AttendanceReport, AttendanceWithMember


class AttendanceRepository(Protocol):
    def insert_pending(self, *, member_id: int, day: date) -> bool:
        """Insert a pending row unless ``(member_id, day)`` already exists.

        Returns True when a row was inserted, False when one already existed.
        Store failures are raised.
        """

        raise NotImplementedError

    def get_for_member(self, member_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_by_date_with_member(self, day: date) -> Sequence[AttendanceWithMember]:
        raise NotImplementedError

    def get_report(self, *, start_date: date, end_date: date, window_start: date) -> AttendanceReport:
        """Daily counts for ``[start_date, end_date]`` plus per-member totals
        and the distinct present-day count since ``window_start``."""

        raise NotImplementedError
