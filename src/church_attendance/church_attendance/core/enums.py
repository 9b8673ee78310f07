from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """권한: 일반 성도 / 부서 담당 스태프 / 관리자."""

    USER = "user"
    STAFF = "staff"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: str | None, default: "Role | None" = None) -> "Role":
        if not value:
            return default or cls.USER
        return cls(value)

    @property
    def is_implicitly_approved(self) -> bool:
        return self in (Role.ADMIN, Role.STAFF)


class AccessState(str, Enum):
    """Outcome of the page access guard."""

    CHECKING = "checking"
    DENIED = "denied"
    GRANTED = "granted"
