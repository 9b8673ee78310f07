from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceKey
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_member_ids(self, key: AttendanceKey) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT member_id
                FROM attendance
                WHERE date=%s AND service_type=%s AND department=%s
                """,
                (key.date, key.service_type, key.department),
            )
            return [str(r["member_id"]) for r in fetchall(cur)]

    def replace_for_key(self, key: AttendanceKey, member_ids: Sequence[str]) -> None:
        # db_cursor commits once at the end, so the delete is rolled back if the insert fails.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance WHERE date=%s AND service_type=%s AND department=%s",
                (key.date, key.service_type, key.department),
            )
            if member_ids:
                cur.executemany(
                    """
                    INSERT INTO attendance(member_id, date, service_type, department)
                    VALUES(%s,%s,%s,%s)
                    """,
                    [(member_id, key.date, key.service_type, key.department) for member_id in member_ids],
                )

    def list_member_ids_on(self, day: date) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT member_id FROM attendance WHERE date=%s", (day,))
            return [str(r["member_id"]) for r in fetchall(cur)]

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance")
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def count_on(self, day: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance WHERE date=%s", (day,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0
