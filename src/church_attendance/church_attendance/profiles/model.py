from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Optional

from ..core.constants import DEFAULT_POSITION
from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """도메인 엔티티: 로그인 계정에 연결된 사용자 프로필.

    profile_id is the login account id. An admin profile is always approved;
    build it through `new` / `with_changes` to keep that true.
    """

    profile_id: str
    full_name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    position: str = DEFAULT_POSITION
    role: Role = Role.USER
    departments: tuple[str, ...] = field(default_factory=tuple)
    approved: bool = False

    @classmethod
    def new(
        cls,
        profile_id: str,
        *,
        full_name: Optional[str] = None,
        username: Optional[str] = None,
        email: Optional[str] = None,
        position: str = DEFAULT_POSITION,
        role: Role = Role.USER,
        departments=(),
        approved: bool = False,
    ) -> "Profile":
        return cls(
            profile_id=profile_id,
            full_name=full_name,
            username=username,
            email=email,
            position=position or DEFAULT_POSITION,
            role=role,
            departments=tuple(departments or ()),
            approved=True if role == Role.ADMIN else bool(approved),
        )

    def with_changes(self, **changes) -> "Profile":
        if "departments" in changes:
            changes["departments"] = tuple(changes["departments"] or ())
        updated = replace(self, **changes)
        if updated.role == Role.ADMIN and not updated.approved:
            updated = replace(updated, approved=True)
        return updated

    @property
    def display_name(self) -> str:
        return self.full_name or self.email or self.username or "-"

    @property
    def can_sign_in(self) -> bool:
        return self.approved or self.role.is_implicitly_approved

    def manages(self, department: str) -> bool:
        return department in self.departments

    def to_dict(self) -> dict:
        data = asdict(self)
        data["role"] = self.role.value
        data["departments"] = list(self.departments)
        return data
