from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

import pytest
from mysql.connector import errors

from src.club_attendance.club_attendance.attendance.model import AttendanceRecord
from src.club_attendance.club_attendance.daily_task.seeders import (
    AttendanceSeeder,
    PendingRowSeeder,
    StatusUpdateSeeder,
)
from src.club_attendance.club_attendance.daily_task.service import DailyBootstrapService
from src.club_attendance.club_attendance.members.model import Member
from src.club_attendance.club_attendance.status_updates.model import StatusUpdateRecord

TODAY = date(2024, 1, 1)


class InMemoryMembers:
    def __init__(self, members: Sequence[Member], *, fail: bool = False):
        self.members = list(members)
        self.fail = fail
        self.calls = 0

    def fetch_all(self):
        self.calls += 1
        if self.fail:
            raise errors.OperationalError("Lost connection to MySQL server")
        return list(self.members)


class InMemoryAttendance:
    """Keyed by (member_id, date) like the unique index; can fail per member."""

    def __init__(self, *, failing: set[int] | None = None, down: bool = False):
        self.rows: dict[tuple[int, date], AttendanceRecord] = {}
        self.failing = set(failing or ())
        self.down = down

    def insert_pending(self, *, member_id: int, day: date) -> bool:
        if self.down or member_id in self.failing:
            raise errors.OperationalError(f"timeout writing member {member_id}")
        if (member_id, day) in self.rows:
            return False
        self.rows[(member_id, day)] = AttendanceRecord(member_id=member_id, date=day)
        return True


class InMemoryStatusUpdates:
    def __init__(self, *, failing: set[int] | None = None, down: bool = False):
        self.rows: dict[tuple[int, date], StatusUpdateRecord] = {}
        self.failing = set(failing or ())
        self.down = down

    def insert_pending(self, *, member_id: int, day: date) -> bool:
        if self.down or member_id in self.failing:
            raise errors.OperationalError(f"timeout writing member {member_id}")
        if (member_id, day) in self.rows:
            return False
        self.rows[(member_id, day)] = StatusUpdateRecord(member_id=member_id, date=day)
        return True


class ExplodingSeeder(PendingRowSeeder):
    table = "exploding"

    def _insert(self, *, member_id: int, day: date) -> bool:
        return True

    def seed(self, members, day):
        raise RuntimeError("boom")


def _roster(n: int = 3) -> list[Member]:
    return [Member(member_id=i, name=f"Member {i}", year=2) for i in range(1, n + 1)]


def _service(members, attendance, status):
    return DailyBootstrapService(members, [AttendanceSeeder(attendance), StatusUpdateSeeder(status)])


def test_seeds_pending_rows_for_every_member():
    attendance, status = InMemoryAttendance(), InMemoryStatusUpdates()
    svc = _service(InMemoryMembers(_roster()), attendance, status)

    result = svc.execute(TODAY)

    assert sorted(attendance.rows) == [(1, TODAY), (2, TODAY), (3, TODAY)]
    assert sorted(status.rows) == [(1, TODAY), (2, TODAY), (3, TODAY)]
    rec = attendance.rows[(1, TODAY)]
    assert rec.is_present is False and rec.time_in is None and rec.time_out is None
    assert status.rows[(2, TODAY)].is_updated is False
    assert result.roster_size == 3
    assert result.outcomes["attendance"].inserted == [1, 2, 3]


def test_second_run_same_day_inserts_nothing():
    attendance, status = InMemoryAttendance(), InMemoryStatusUpdates()
    svc = _service(InMemoryMembers(_roster()), attendance, status)

    svc.execute(TODAY)
    before = (dict(attendance.rows), dict(status.rows))
    result = svc.execute(TODAY)

    assert (attendance.rows, status.rows) == before
    assert result.outcomes["attendance"].inserted == []
    assert result.outcomes["attendance"].skipped == [1, 2, 3]
    assert result.outcomes["status_update_history"].skipped == [1, 2, 3]


def test_existing_row_is_left_untouched():
    attendance, status = InMemoryAttendance(), InMemoryStatusUpdates()
    marked = AttendanceRecord(member_id=2, date=TODAY, is_present=True)
    attendance.rows[(2, TODAY)] = marked

    _service(InMemoryMembers(_roster()), attendance, status).execute(TODAY)

    assert attendance.rows[(2, TODAY)] is marked


def test_attendance_store_down_does_not_stop_status_seeding():
    attendance, status = InMemoryAttendance(down=True), InMemoryStatusUpdates()

    result = _service(InMemoryMembers(_roster()), attendance, status).execute(TODAY)

    assert attendance.rows == {}
    assert sorted(status.rows) == [(1, TODAY), (2, TODAY), (3, TODAY)]
    assert result.outcomes["attendance"].failed == [1, 2, 3]


def test_status_store_down_does_not_stop_attendance_seeding():
    attendance, status = InMemoryAttendance(), InMemoryStatusUpdates(down=True)

    result = _service(InMemoryMembers(_roster()), attendance, status).execute(TODAY)

    assert sorted(attendance.rows) == [(1, TODAY), (2, TODAY), (3, TODAY)]
    assert status.rows == {}
    assert result.outcomes["status_update_history"].failed == [1, 2, 3]


def test_one_failing_member_does_not_abort_the_batch(caplog):
    caplog.set_level(logging.DEBUG)
    attendance, status = InMemoryAttendance(failing={2}), InMemoryStatusUpdates()
    svc = _service(InMemoryMembers(_roster(4)), attendance, status)

    result = svc.execute(TODAY)

    assert sorted(k[0] for k in attendance.rows) == [1, 3, 4]
    assert result.outcomes["attendance"].failed == [2]
    assert any(
        r.levelno == logging.ERROR and "member ID: 2" in r.getMessage() and "timeout" in r.getMessage()
        for r in caplog.records
    )

    # Store recovers; a re-run fills exactly the gap.
    attendance.failing.clear()
    rerun = svc.execute(TODAY)

    assert rerun.outcomes["attendance"].inserted == [2]
    assert len(attendance.rows) == 4


def test_roster_failure_aborts_the_cycle(caplog):
    attendance, status = InMemoryAttendance(), InMemoryStatusUpdates()
    members = InMemoryMembers(_roster(), fail=True)

    result = _service(members, attendance, status).execute(TODAY)

    assert result.aborted
    assert attendance.rows == {} and status.rows == {}
    assert "Failed to fetch members" in caplog.text


def test_roster_is_fetched_fresh_every_cycle():
    attendance, status = InMemoryAttendance(), InMemoryStatusUpdates()
    members = InMemoryMembers(_roster(2))
    svc = _service(members, attendance, status)

    svc.execute(TODAY)
    members.members.append(Member(member_id=9, name="New", year=1))
    svc.execute(date(2024, 1, 2))

    assert members.calls == 2
    assert (9, date(2024, 1, 2)) in attendance.rows
    assert (9, TODAY) not in attendance.rows


def test_crashing_seeder_does_not_affect_the_other(caplog):
    status = InMemoryStatusUpdates()
    svc = DailyBootstrapService(InMemoryMembers(_roster()), [ExplodingSeeder(), StatusUpdateSeeder(status)])

    result = svc.execute(TODAY)

    assert result.outcomes["exploding"] is None
    assert result.outcomes["status_update_history"].inserted == [1, 2, 3]
    assert "Seeder for exploding crashed" in caplog.text


@pytest.mark.parametrize("failing", [set(), {1}, {1, 2, 3}])
def test_every_member_is_attempted_once_per_table(failing):
    attendance, status = InMemoryAttendance(failing=failing), InMemoryStatusUpdates(failing=failing)

    result = _service(InMemoryMembers(_roster()), attendance, status).execute(TODAY)

    for outcome in result.outcomes.values():
        assert outcome.attempted == 3
        assert outcome.failed == sorted(failing)
