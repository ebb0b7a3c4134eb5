from __future__ import annotations

from datetime import date
from typing import Callable, Sequence

from ..attendance.model import AttendanceRecord, AttendanceReport, AttendanceWithMember
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import months_before
from ..common.validators import require_date_range, require_iso_date, require_positive_id
from ..core.constants import REPORT_WINDOW_MONTHS


class AttendanceReportService:
    """Read-only attendance queries.

    Input is validated before any query runs; bad input raises
    ValidationError with a message meant for the caller.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        today_fn: Callable[[], date],
        window_months: int = REPORT_WINDOW_MONTHS,
    ):
        self._attendance = attendance
        self._today_fn = today_fn
        self._window_months = int(window_months)

    def get_attendance_summary(self, start_date: str | date, end_date: str | date) -> AttendanceReport:
        start = require_iso_date(start_date, "start_date")
        end = require_iso_date(end_date, "end_date")
        require_date_range(start, end)

        # Trailing window counts back from today, not from end_date.
        window_start = months_before(self._today_fn(), self._window_months)
        return self._attendance.get_report(start_date=start, end_date=end, window_start=window_start)

    def get_member_attendance(self, member_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.get_for_member(require_positive_id(member_id, "member_id"))

    def get_attendance_by_date(self, day: str | date) -> Sequence[AttendanceWithMember]:
        return self._attendance.get_by_date_with_member(require_iso_date(day, "date"))
