from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .accounts.mysql_account_repository import MySQLAccountRepository
from .accounts.repository import AccountRepository
from .accounts.service import CredentialProvider, SignInThrottle
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import (
    DEFAULT_PLACEHOLDER_DOMAIN,
    DEFAULT_SIGNIN_COOLDOWN_SECONDS,
    DEFAULT_SIGNIN_MAX_ATTEMPTS,
    DEFAULT_SIGNIN_WINDOW_SECONDS,
)
from .database.connection import DatabaseConnection, DBConfig
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .profiles.guard import ProfileGuard
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.repository import ProfileRepository
from .profiles.service import AuthService, ProfileService
from .stats.service import StatisticsService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    accounts_repo: AccountRepository
    profiles_repo: ProfileRepository
    members_repo: MemberRepository
    attendance_repo: AttendanceRepository

    credential_provider: CredentialProvider
    auth_service: AuthService
    profile_service: ProfileService
    attendance_service: AttendanceService
    statistics_service: StatisticsService
    guard: ProfileGuard


def assemble(
    *,
    accounts_repo: AccountRepository,
    profiles_repo: ProfileRepository,
    members_repo: MemberRepository,
    attendance_repo: AttendanceRepository,
    conn: Optional[DatabaseConnection] = None,
    placeholder_domain: str = DEFAULT_PLACEHOLDER_DOMAIN,
    signin_max_attempts: int = DEFAULT_SIGNIN_MAX_ATTEMPTS,
    signin_cooldown_seconds: int = DEFAULT_SIGNIN_COOLDOWN_SECONDS,
    signin_window_seconds: int = DEFAULT_SIGNIN_WINDOW_SECONDS,
) -> Container:
    """Wire services on top of any repository implementations."""
    credential_provider = CredentialProvider(
        accounts_repo,
        throttle=SignInThrottle(
            max_attempts=signin_max_attempts,
            cooldown_seconds=signin_cooldown_seconds,
            window_seconds=signin_window_seconds,
        ),
    )

    return Container(
        conn=conn,
        accounts_repo=accounts_repo,
        profiles_repo=profiles_repo,
        members_repo=members_repo,
        attendance_repo=attendance_repo,
        credential_provider=credential_provider,
        auth_service=AuthService(credential_provider, profiles_repo, placeholder_domain=placeholder_domain),
        profile_service=ProfileService(profiles_repo),
        attendance_service=AttendanceService(attendance_repo, members_repo),
        statistics_service=StatisticsService(attendance_repo, profiles_repo),
        guard=ProfileGuard(profiles_repo),
    )


def build_container(*, db_config: dict, **options) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        conn=conn,
        accounts_repo=MySQLAccountRepository(conn),
        profiles_repo=MySQLProfileRepository(conn),
        members_repo=MySQLMemberRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        **options,
    )
