from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import (
    AttendanceRecord,
    AttendanceReport,
    AttendanceWithMember,
    DailyCount,
    MemberAttendanceSummary,
)
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_pending(self, *, member_id: int, day: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # No-op update on conflict: the existing row is kept as is.
            cur.execute(
                """
                INSERT INTO attendance(member_id, date, is_present, time_in, time_out)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE member_id=member_id
                """,
                (int(member_id), day, False, None, None),
            )
            return cur.rowcount == 1

    def get_for_member(self, member_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, member_id, date, is_present, time_in, time_out
                FROM attendance
                WHERE member_id=%s
                ORDER BY date
                """,
                (int(member_id),),
            )
            return [
                AttendanceRecord(
                    attendance_id=int(r["attendance_id"]),
                    member_id=int(r["member_id"]),
                    date=r["date"],
                    is_present=bool(r["is_present"]),
                    time_in=normalize_mysql_time(r.get("time_in")),
                    time_out=normalize_mysql_time(r.get("time_out")),
                )
                for r in fetchall(cur)
            ]

    def get_by_date_with_member(self, day: date) -> Sequence[AttendanceWithMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.attendance_id, a.member_id, a.date, a.is_present,
                       a.time_in, a.time_out, m.name, m.year
                FROM attendance a
                JOIN members m ON m.member_id = a.member_id
                WHERE a.date=%s
                ORDER BY a.member_id
                """,
                (day,),
            )
            return [
                AttendanceWithMember(
                    attendance_id=int(r["attendance_id"]),
                    member_id=int(r["member_id"]),
                    date=r["date"],
                    is_present=bool(r["is_present"]),
                    time_in=normalize_mysql_time(r.get("time_in")),
                    time_out=normalize_mysql_time(r.get("time_out")),
                    name=r["name"],
                    year=int(r["year"]),
                )
                for r in fetchall(cur)
            ]

    def get_report(self, *, start_date: date, end_date: date, window_start: date) -> AttendanceReport:
        # One read-only snapshot for all three parts.
        with db_cursor(self._conn_factory, readonly=True) as (_, cur):
            cur.execute(
                """
                SELECT a.date,
                       COUNT(CASE WHEN a.is_present THEN a.member_id END) AS total_present
                FROM attendance a
                WHERE a.date BETWEEN %s AND %s
                GROUP BY a.date
                ORDER BY a.date
                """,
                (start_date, end_date),
            )
            daily_count = [
                DailyCount(date=r["date"], count=int(r["total_present"] or 0))
                for r in fetchall(cur)
            ]

            cur.execute(
                """
                SELECT m.member_id, m.name, COUNT(a.attendance_id) AS present_days
                FROM members m
                LEFT JOIN attendance a
                    ON a.member_id = m.member_id
                    AND a.is_present
                    AND a.date >= %s
                GROUP BY m.member_id, m.name
                ORDER BY m.member_id
                """,
                (window_start,),
            )
            member_attendance = [
                MemberAttendanceSummary(
                    member_id=int(r["member_id"]),
                    name=r["name"],
                    present_days=int(r["present_days"] or 0),
                )
                for r in fetchall(cur)
            ]

            cur.execute(
                """
                SELECT COUNT(DISTINCT date) AS max_days
                FROM attendance
                WHERE date >= %s AND is_present
                """,
                (window_start,),
            )
            row = fetchone(cur)
            max_days = int(row["max_days"] or 0) if row else 0

        return AttendanceReport(
            daily_count=daily_count,
            member_attendance=member_attendance,
            max_days=max_days,
        )
