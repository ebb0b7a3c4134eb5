from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one member's attendance on one date.

    Seeded as pending (not present, no times) by the daily task; the
    check-in scanner fills it in during the day.
    """

    member_id: int
    date: date
    is_present: bool = False
    time_in: Optional[time] = None
    time_out: Optional[time] = None
    attendance_id: Optional[int] = None


@dataclass(frozen=True)
class AttendanceWithMember:
    """Read-model for the per-date listing (record joined with member)."""

    attendance_id: int
    member_id: int
    date: date
    is_present: bool
    time_in: Optional[time]
    time_out: Optional[time]
    name: str
    year: int


@dataclass(frozen=True)
class DailyCount:
    date: date
    count: int


@dataclass(frozen=True)
class MemberAttendanceSummary:
    member_id: int
    name: str
    present_days: int


@dataclass(frozen=True)
class AttendanceReport:
    """Combined report: present count per day, per-member totals, max days."""

    daily_count: list[DailyCount] = field(default_factory=list)
    member_attendance: list[MemberAttendanceSummary] = field(default_factory=list)
    max_days: int = 0

    def to_dict(self) -> dict:
        return {
            "daily_count": [{"date": d.date.isoformat(), "count": d.count} for d in self.daily_count],
            "member_attendance": [
                {"id": m.member_id, "name": m.name, "present_days": m.present_days}
                for m in self.member_attendance
            ],
            "max_days": self.max_days,
        }
