from __future__ import annotations

from datetime import date

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .repository import StatusUpdateRepository


class MySQLStatusUpdateRepository(StatusUpdateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_pending(self, *, member_id: int, day: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO status_update_history(member_id, date, is_updated)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE member_id=member_id
                """,
                (int(member_id), day, False),
            )
            return cur.rowcount == 1
