from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from src.church_attendance.church_attendance.container import assemble
from src.church_attendance.church_attendance.core.enums import Role
from src.church_attendance.church_attendance.main import create_app
from src.church_attendance.church_attendance.members.model import Member
from src.church_attendance.church_attendance.profiles.model import Profile

from tests.fakes import InMemoryAccounts, InMemoryAttendance, InMemoryMembers, InMemoryProfiles


@pytest.fixture
def repos():
    accounts = InMemoryAccounts()
    profiles = InMemoryProfiles()

    def add_user(account_id, username, password, *, role=Role.USER, approved=True, departments=(), email=None):
        accounts.create(
            account_id=account_id,
            email=email or f"{username}@example.com",
            password_hash=generate_password_hash(password),
        )
        profiles.by_id[account_id] = Profile.new(
            account_id,
            full_name=username.title(),
            username=username,
            email=email,
            role=role,
            departments=departments,
            approved=approved,
        )

    add_user("admin-1", "admin", "admin123", role=Role.ADMIN)
    add_user("staff-1", "kim", "password1", role=Role.STAFF, departments=["청년부"])
    add_user("user-1", "lee", "password2", departments=["유년부"])

    members = InMemoryMembers(
        Member("m1", "김철수", "청년부"),
        Member("m2", "이영희", "청년부"),
        Member("m3", "박민수", "유년부"),
    )
    return {
        "accounts": accounts,
        "profiles": profiles,
        "members": members,
        "attendance": InMemoryAttendance(),
    }


@pytest.fixture
def container(repos):
    return assemble(
        accounts_repo=repos["accounts"],
        profiles_repo=repos["profiles"],
        members_repo=repos["members"],
        attendance_repo=repos["attendance"],
        signin_max_attempts=3,
        signin_cooldown_seconds=60,
    )


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(account_id, *, name="테스트", role="user"):
        with client.session_transaction() as sess:
            sess["account_id"] = account_id
            sess["name"] = name
            sess["role"] = role
        return client

    return _login
