from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Member
from .repository import MemberRepository


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_all(self) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT member_id, name, year, email
                FROM members
                ORDER BY member_id
                """
            )
            return [
                Member(
                    member_id=int(r["member_id"]),
                    name=r["name"],
                    year=int(r["year"]),
                    email=r.get("email"),
                )
                for r in fetchall(cur)
            ]
