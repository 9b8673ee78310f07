from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Member
from .repository import MemberRepository


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_department(self, department: str) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT member_id, name, department FROM members WHERE department=%s ORDER BY name",
                (department,),
            )
            rows = fetchall(cur)
            return [Member(member_id=str(r["member_id"]), name=r["name"], department=r["department"]) for r in rows]
