from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_list, fetchall, fetchone, load_json_list
from .model import Profile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)

_COLUMNS = "profile_id, full_name, username, email, position, role, departments, approved"


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE profile_id=%s", (profile_id,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def get_by_username(self, username: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def insert(self, profile: Profile) -> Profile:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profiles(profile_id, full_name, username, email, position, role, departments, approved)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    profile.profile_id,
                    profile.full_name,
                    profile.username,
                    profile.email,
                    profile.position,
                    profile.role.value,
                    dump_json_list(profile.departments),
                    int(profile.approved),
                ),
            )
        return profile

    def update(self, profile: Profile) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE profiles
                SET full_name=%s, username=%s, email=%s, position=%s, role=%s, departments=%s, approved=%s
                WHERE profile_id=%s
                """,
                (
                    profile.full_name,
                    profile.username,
                    profile.email,
                    profile.position,
                    profile.role.value,
                    dump_json_list(profile.departments),
                    int(profile.approved),
                    profile.profile_id,
                ),
            )
            # rowcount is 0 when nothing changed; existence is what matters here
            cur.execute("SELECT 1 AS ok FROM profiles WHERE profile_id=%s", (profile.profile_id,))
            return fetchone(cur) is not None

    def set_approved(self, profile_id: str, *, approved: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE profiles SET approved=%s WHERE profile_id=%s", (int(approved), profile_id))
            cur.execute("SELECT 1 AS ok FROM profiles WHERE profile_id=%s", (profile_id,))
            return fetchone(cur) is not None

    def delete_by_id(self, profile_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM profiles WHERE profile_id=%s", (profile_id,))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles ORDER BY full_name IS NULL, full_name ASC")
            return [_to_profile(r) for r in fetchall(cur)]

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM profiles")
            row = fetchone(cur)
            return int(row["n"]) if row else 0


def _to_role(row: dict) -> Role:
    try:
        return Role.parse(row.get("role"))
    except ValueError:
        logger.warning("unknown role %r on profile %s, treating as user", row.get("role"), row.get("profile_id"))
        return Role.USER


def _to_profile(row: dict) -> Profile:
    return Profile(
        profile_id=str(row["profile_id"]),
        full_name=row.get("full_name"),
        username=row.get("username"),
        email=row.get("email"),
        position=row.get("position") or "성도",
        role=_to_role(row),
        departments=tuple(load_json_list(row.get("departments"))),
        approved=bool(row.get("approved")),
    )
