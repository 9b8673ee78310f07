"""Single access check shared by every protected page.

resolve identity -> load profile -> evaluate a predicate over the profile.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..core.enums import AccessState, Role
from ..core.exceptions import AuthenticationError, StoreError
from .model import Profile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)

AccessPredicate = Callable[[Profile], bool]


@dataclass(frozen=True)
class AccessDecision:
    state: AccessState = AccessState.CHECKING
    profile: Optional[Profile] = None
    reason: Optional[str] = None

    @property
    def granted(self) -> bool:
        return self.state == AccessState.GRANTED


def any_profile(profile: Profile) -> bool:
    return True


def is_admin(profile: Profile) -> bool:
    return profile.role == Role.ADMIN


def is_admin_or_staff(profile: Profile) -> bool:
    return profile.role in (Role.ADMIN, Role.STAFF)


def manages_department(department: str) -> AccessPredicate:
    def predicate(profile: Profile) -> bool:
        return bool(department) and (profile.role == Role.ADMIN or profile.manages(department))

    return predicate


class ProfileGuard:
    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def evaluate(self, account_id: Optional[str], predicate: AccessPredicate = any_profile) -> AccessDecision:
        if not account_id:
            raise AuthenticationError("로그인이 필요합니다.")

        try:
            profile = self._profiles.get_by_id(account_id)
        except StoreError as e:
            logger.warning("guard profile lookup failed for %s: %s", account_id, e)
            return AccessDecision(AccessState.DENIED, None, str(e))

        if profile is None:
            return AccessDecision(AccessState.DENIED, None, "프로필 정보가 없습니다.")
        if not profile.can_sign_in:
            return AccessDecision(AccessState.DENIED, profile, "관리자 승인 대기 중입니다.")
        if not predicate(profile):
            return AccessDecision(AccessState.DENIED, profile, None)
        return AccessDecision(AccessState.GRANTED, profile, None)
