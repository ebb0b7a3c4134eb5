from __future__ import annotations

from datetime import date, time, timedelta
from pathlib import Path

import pytest

from src.club_attendance.club_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.club_attendance.club_attendance.database import bootstrap
from src.club_attendance.club_attendance.database.bootstrap import SCHEMA_PATH, iter_sql_statements
from src.club_attendance.club_attendance.database.mysql_base import db_cursor, normalize_mysql_time
from src.club_attendance.club_attendance.members.mysql_member_repository import MySQLMemberRepository
from src.club_attendance.club_attendance.status_updates.mysql_status_update_repository import (
    MySQLStatusUpdateRepository,
)


class FakeCursor:
    def __init__(self, results=None, rowcount=1):
        self._results = list(results or [])
        self._current: list[dict] = []
        self.rowcount = rowcount
        self.executed: list[tuple[str, tuple]] = []
        self.closed = False

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), tuple(params)))
        self._current = self._results.pop(0) if self._results else []

    def fetchall(self):
        return self._current

    def fetchone(self):
        return self._current[0] if self._current else None

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self.cursor_obj = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False
        self.transaction = None

    def start_transaction(self, **kwargs):
        self.transaction = kwargs

    def cursor(self, dictionary=False):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, cursor: FakeCursor):
        self.conn = FakeConnection(cursor)

    def connect(self):
        return self.conn


def test_db_cursor_commits_and_closes():
    factory = FakeConnFactory(FakeCursor())

    with db_cursor(factory) as (_, cur):
        cur.execute("SELECT 1")

    assert factory.conn.committed and factory.conn.closed and factory.conn.cursor_obj.closed
    assert factory.conn.transaction is None


def test_db_cursor_rolls_back_on_error():
    factory = FakeConnFactory(FakeCursor())

    with pytest.raises(RuntimeError):
        with db_cursor(factory) as _:
            raise RuntimeError("write failed")

    assert factory.conn.rolled_back and not factory.conn.committed and factory.conn.closed


def test_insert_pending_attendance_ignores_conflicts():
    cursor = FakeCursor(rowcount=1)
    repo = MySQLAttendanceRepository(FakeConnFactory(cursor))

    assert repo.insert_pending(member_id=7, day=date(2024, 1, 1)) is True
    sql, params = cursor.executed[0]
    assert "INSERT INTO attendance" in sql and "ON DUPLICATE KEY UPDATE member_id=member_id" in sql
    assert params == (7, date(2024, 1, 1), False, None, None)

    cursor.rowcount = 0
    assert repo.insert_pending(member_id=7, day=date(2024, 1, 1)) is False


def test_insert_pending_status_update():
    cursor = FakeCursor(rowcount=0)
    repo = MySQLStatusUpdateRepository(FakeConnFactory(cursor))

    assert repo.insert_pending(member_id=3, day=date(2024, 1, 1)) is False
    sql, params = cursor.executed[0]
    assert "INSERT INTO status_update_history" in sql and "ON DUPLICATE KEY UPDATE" in sql
    assert params == (3, date(2024, 1, 1), False)


def test_member_roster_mapping():
    cursor = FakeCursor(results=[[{"member_id": 2, "name": "Bilal", "year": "3", "email": None}]])

    members = MySQLMemberRepository(FakeConnFactory(cursor)).fetch_all()

    assert members[0].member_id == 2 and members[0].year == 3 and members[0].name == "Bilal"


def test_report_runs_in_one_read_only_snapshot():
    cursor = FakeCursor(
        results=[
            [{"date": date(2024, 1, 1), "total_present": 2}, {"date": date(2024, 1, 2), "total_present": None}],
            [{"member_id": 1, "name": "Asha", "present_days": 2}, {"member_id": 3, "name": "Chen", "present_days": 0}],
            [{"max_days": 2}],
        ]
    )
    factory = FakeConnFactory(cursor)

    report = MySQLAttendanceRepository(factory).get_report(
        start_date=date(2024, 1, 1), end_date=date(2024, 1, 2), window_start=date(2023, 7, 3)
    )

    assert factory.conn.transaction == {"consistent_snapshot": True, "readonly": True}
    assert [(d.date, d.count) for d in report.daily_count] == [(date(2024, 1, 1), 2), (date(2024, 1, 2), 0)]
    assert [m.present_days for m in report.member_attendance] == [2, 0]
    assert report.max_days == 2
    assert "LEFT JOIN attendance" in cursor.executed[1][0]
    assert cursor.executed[1][1] == (date(2023, 7, 3),)


def test_attendance_rows_normalize_time_columns():
    cursor = FakeCursor(
        results=[
            [
                {
                    "attendance_id": 1,
                    "member_id": 4,
                    "date": date(2024, 1, 1),
                    "is_present": 1,
                    "time_in": timedelta(hours=9, minutes=5),
                    "time_out": None,
                }
            ]
        ]
    )

    rows = MySQLAttendanceRepository(FakeConnFactory(cursor)).get_for_member(4)

    assert rows[0].is_present is True
    assert rows[0].time_in == time(9, 5)
    assert rows[0].time_out is None


def test_normalize_mysql_time_variants():
    assert normalize_mysql_time(None) is None
    assert normalize_mysql_time(time(8, 30)) == time(8, 30)
    assert normalize_mysql_time("08:30") == time(8, 30)
    with pytest.raises(TypeError):
        normalize_mysql_time(830)


def test_schema_ships_next_to_the_bootstrap_module():
    assert SCHEMA_PATH.name == "schema.sql"
    assert SCHEMA_PATH.parent == Path(bootstrap.__file__).resolve().parent
    assert SCHEMA_PATH.is_file()


def test_schema_splits_into_table_statements():
    statements = list(iter_sql_statements(SCHEMA_PATH.read_text(encoding="utf-8")))

    creates = [s for s in statements if s.upper().startswith("CREATE TABLE")]
    assert len(creates) == 3
    assert all("UNIQUE KEY" in s for s in creates[1:])
    assert not any(s.startswith("--") for s in statements)


def test_statement_splitter_keeps_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\n-- note; here\nSELECT \"x;\";"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", 'SELECT "x;"']
