from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

from ..accounts.service import CredentialProvider
from ..common.error_messages import translate_provider_error
from ..common.validators import require_min_length, require_non_empty, require_username
from ..core.constants import DEFAULT_MIN_PASSWORD_LENGTH, DEFAULT_PLACEHOLDER_DOMAIN, POSITIONS
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CredentialError,
    PendingApprovalError,
    RateLimitError,
    StoreError,
    ValidationError,
)
from .model import Profile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)

PENDING_APPROVAL_MESSAGE = (
    "⏳ 관리자 승인 대기 중입니다.\n\n"
    "회원가입이 완료되었지만 아직 관리자의 승인을 받지 못했습니다.\n"
    "관리자가 승인하면 로그인할 수 있습니다.\n\n"
    "승인까지 시간이 걸릴 수 있으니 잠시만 기다려주세요."
)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    account_id: str
    full_name: str
    role: Role


class ProfileService:
    """Use cases around the profiles table (self-service and admin)."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        return self._profiles.get_by_id(profile_id)

    def ensure_profile(self, account_id: str, email: Optional[str]) -> tuple[Profile, bool]:
        """Return the profile for account_id, creating an unapproved one if missing.

        The bool is True when this call created the row.
        """
        if not account_id:
            raise ValidationError("userId가 없습니다.")

        existing = self._profiles.get_by_id(account_id)
        if existing:
            return existing, False

        profile = Profile.new(account_id, email=email or None, role=Role.USER, approved=False)
        self._profiles.insert(profile)
        logger.info("profile created for %s", account_id)
        return profile, True

    def create_or_upgrade_profile(
        self,
        *,
        account_id: str,
        full_name: Optional[str] = None,
        username: Optional[str] = None,
        email: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Profile:
        if not account_id:
            raise ValidationError("user_id가 필요합니다.")
        try:
            requested_role = Role(role) if role else None
        except ValueError:
            raise ValidationError("권한 값이 올바르지 않습니다.")

        existing = self._profiles.get_by_id(account_id)
        if existing:
            updated = existing.with_changes(
                full_name=full_name or existing.full_name,
                username=username or existing.username,
                email=email or existing.email,
                role=requested_role or existing.role,
            )
            self._profiles.update(updated)
            return updated

        profile = Profile.new(
            account_id,
            full_name=full_name or None,
            username=username or None,
            email=email or None,
            role=requested_role or Role.USER,
            approved=False,
        )
        return self._profiles.insert(profile)

    def list_profiles(self, *, current_role: Role) -> Sequence[Profile]:
        _require_admin(current_role)
        return self._profiles.list_all()

    def count_profiles(self) -> int:
        return self._profiles.count_all()

    def update_profile(
        self,
        *,
        current_role: Role,
        profile_id: str,
        full_name: str,
        email: str,
        position: str,
        role: str,
        departments: Iterable[str],
    ) -> Profile:
        _require_admin(current_role)

        if position not in POSITIONS:
            raise ValidationError("직분 값이 올바르지 않습니다.")
        try:
            new_role = Role(role)
        except ValueError:
            raise ValidationError("권한 값이 올바르지 않습니다.")

        existing = self._profiles.get_by_id(profile_id)
        if not existing:
            raise ValidationError("사용자를 찾을 수 없습니다.")

        updated = existing.with_changes(
            full_name=(full_name or "").strip() or None,
            email=(email or "").strip() or None,
            position=position,
            role=new_role,
            departments=list(departments),
        )
        if not self._profiles.update(updated):
            raise ValidationError("사용자를 찾을 수 없습니다.")
        return updated

    def set_approval(self, *, current_role: Role, profile_id: str, approve: bool) -> None:
        _require_admin(current_role)

        existing = self._profiles.get_by_id(profile_id)
        if not existing:
            raise ValidationError("사용자를 찾을 수 없습니다.")
        if not approve and existing.role == Role.ADMIN:
            raise ValidationError("관리자의 승인은 취소할 수 없습니다.")

        if not self._profiles.set_approved(profile_id, approved=approve):
            raise ValidationError("사용자를 찾을 수 없습니다.")

    def delete_profile(self, *, current_role: Role, current_profile_id: str, profile_id: str) -> None:
        _require_admin(current_role)

        if profile_id == current_profile_id:
            raise ValidationError("자기 자신은 삭제할 수 없습니다.")
        if not self._profiles.delete_by_id(profile_id):
            raise ValidationError("사용자를 찾을 수 없습니다.")
        logger.info("profile deleted: %s", profile_id)


class AuthService:
    """Use case: username login and self sign-up."""

    def __init__(
        self,
        provider: CredentialProvider,
        profiles: ProfileRepository,
        *,
        placeholder_domain: str = DEFAULT_PLACEHOLDER_DOMAIN,
    ):
        self._provider = provider
        self._profiles = profiles
        self._profile_service = ProfileService(profiles)
        self._placeholder_domain = placeholder_domain

    def placeholder_email(self, username: str) -> str:
        return f"{username.strip().lower()}@{self._placeholder_domain}"

    def _candidate_emails(self, username: str) -> Iterator[str]:
        yield self.placeholder_email(username)

        # Account may have been created with a real email address.
        try:
            profile = self._profiles.get_by_username(username.strip().lower())
        except StoreError:
            logger.warning("username lookup failed for %s", username, exc_info=True)
            return
        if profile and profile.email:
            yield profile.email

    def _resolve_account(self, username: str, password: str):
        return self._provider.sign_in_any(
            self._candidate_emails(username),
            password,
            throttle_key=username.strip().lower(),
        )

    def login(self, username: str, password: str) -> SessionUser:
        username = require_non_empty(username, "아이디를 입력해주세요.")
        require_non_empty(password, "비밀번호를 입력해주세요.")

        try:
            account = self._resolve_account(username, password)
        except CredentialError as e:
            translated = translate_provider_error(str(e))
            retry_after = e.retry_after if isinstance(e, RateLimitError) else translated.cooldown_seconds
            raise AuthenticationError(translated.message, retry_after=retry_after) from e

        try:
            profile = self._profiles.get_by_id(account.account_id)
        except StoreError as e:
            logger.error("profile lookup after sign-in failed: %s", e)
            raise AuthenticationError("프로필을 확인하는 중 오류가 발생했습니다.") from e

        if not profile or not profile.can_sign_in:
            logger.info("sign-in refused, pending approval: %s", account.account_id)
            raise PendingApprovalError(PENDING_APPROVAL_MESSAGE)

        return SessionUser(account_id=account.account_id, full_name=profile.display_name, role=profile.role)

    def sign_up(
        self,
        *,
        full_name: str,
        username: str,
        password: str,
        confirm_password: str,
        email: str = "",
    ) -> Profile:
        if password != confirm_password:
            raise ValidationError("비밀번호가 일치하지 않습니다.")
        require_min_length(password, "비밀번호는 최소 6자 이상이어야 합니다.", DEFAULT_MIN_PASSWORD_LENGTH)
        full_name = require_non_empty(full_name, "이름을 입력해주세요.")
        username = require_username(username)
        real_email = (email or "").strip() or None

        if self._profiles.get_by_username(username):
            raise ValidationError("이미 사용 중인 아이디입니다.")

        try:
            account = self._provider.sign_up(real_email or self.placeholder_email(username), password)
        except CredentialError as e:
            raise ValidationError(translate_provider_error(str(e)).message) from e

        try:
            return self._profile_service.create_or_upgrade_profile(
                account_id=account.account_id,
                full_name=full_name,
                username=username,
                email=real_email,
            )
        except StoreError as e:
            logger.error("account %s created but profile insert failed: %s", account.account_id, e)
            raise ValidationError(
                f"프로필 생성 중 오류가 발생했습니다: {e}. "
                "계정은 생성되었지만 프로필이 생성되지 않았습니다. 관리자에게 문의해주세요."
            ) from e


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("관리자 권한이 필요합니다.")
