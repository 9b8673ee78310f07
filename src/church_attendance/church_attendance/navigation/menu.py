from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class MenuItem:
    endpoint: str
    label: str
    icon: str


BASE_MENU = (
    MenuItem("home", "홈", "🏠"),
    MenuItem("mypage", "마이페이지", "👤"),
    MenuItem("attendance_index", "출석 체크", "✓"),
)


def build_menu(role: Optional[Role]) -> list[MenuItem]:
    """Sidebar entries for the logged-in role (None when logged out)."""
    if role is None:
        return []

    items = list(BASE_MENU)
    if role in (Role.ADMIN, Role.STAFF):
        items.append(MenuItem("admin_home", "관리자페이지", "⚙️"))
    if role == Role.ADMIN:
        items.append(MenuItem("admin_users", "사용자 관리", "👥"))
    return items
