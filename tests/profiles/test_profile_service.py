from __future__ import annotations

import pytest

from src.church_attendance.church_attendance.core.enums import Role
from src.church_attendance.church_attendance.core.exceptions import AuthorizationError, ValidationError
from src.church_attendance.church_attendance.profiles.model import Profile
from src.church_attendance.church_attendance.profiles.service import ProfileService

from tests.fakes import InMemoryProfiles


def test_profile_new_admin_is_always_approved():
    p = Profile.new("a1", role=Role.ADMIN, approved=False)

    assert p.approved is True


def test_with_changes_promoting_to_admin_approves():
    p = Profile.new("u1", role=Role.USER, approved=False)

    promoted = p.with_changes(role=Role.ADMIN)

    assert promoted.approved is True
    assert p.approved is False


def test_ensure_profile_creates_once():
    repo = InMemoryProfiles()
    svc = ProfileService(repo)

    first, created_first = svc.ensure_profile("u1", "u1@example.org")
    second, created_second = svc.ensure_profile("u1", "other@example.org")

    assert created_first is True
    assert created_second is False
    assert second == first
    assert first.role == Role.USER
    assert first.approved is False
    assert repo.count_all() == 1


def test_ensure_profile_requires_account_id():
    svc = ProfileService(InMemoryProfiles())

    with pytest.raises(ValidationError):
        svc.ensure_profile("", None)


def test_update_profile_to_admin_sets_approved():
    repo = InMemoryProfiles(Profile.new("u1", full_name="이영희", approved=False))
    svc = ProfileService(repo)

    updated = svc.update_profile(
        current_role=Role.ADMIN,
        profile_id="u1",
        full_name="이영희",
        email="",
        position="집사",
        role="admin",
        departments=["청년부", "유년부"],
    )

    assert updated.approved is True
    stored = repo.get_by_id("u1")
    assert stored.role == Role.ADMIN
    assert stored.departments == ("청년부", "유년부")
    assert stored.email is None


def test_update_profile_rejects_unknown_position_and_role():
    repo = InMemoryProfiles(Profile.new("u1"))
    svc = ProfileService(repo)
    base = dict(current_role=Role.ADMIN, profile_id="u1", full_name="x", email="", departments=[])

    with pytest.raises(ValidationError):
        svc.update_profile(position="회장", role="user", **base)
    with pytest.raises(ValidationError):
        svc.update_profile(position="성도", role="owner", **base)


def test_admin_operations_require_admin_role():
    repo = InMemoryProfiles(Profile.new("u1"))
    svc = ProfileService(repo)

    with pytest.raises(AuthorizationError):
        svc.list_profiles(current_role=Role.STAFF)
    with pytest.raises(AuthorizationError):
        svc.set_approval(current_role=Role.USER, profile_id="u1", approve=True)


def test_set_approval_cannot_revoke_admin():
    repo = InMemoryProfiles(Profile.new("a1", role=Role.ADMIN), Profile.new("u1"))
    svc = ProfileService(repo)

    svc.set_approval(current_role=Role.ADMIN, profile_id="u1", approve=True)
    with pytest.raises(ValidationError):
        svc.set_approval(current_role=Role.ADMIN, profile_id="a1", approve=False)

    assert repo.get_by_id("u1").approved is True
    assert repo.get_by_id("a1").approved is True


def test_delete_profile_refuses_self():
    repo = InMemoryProfiles(Profile.new("a1", role=Role.ADMIN), Profile.new("u1"))
    svc = ProfileService(repo)

    with pytest.raises(ValidationError):
        svc.delete_profile(current_role=Role.ADMIN, current_profile_id="a1", profile_id="a1")
    svc.delete_profile(current_role=Role.ADMIN, current_profile_id="a1", profile_id="u1")

    assert repo.get_by_id("u1") is None


def test_create_or_upgrade_keeps_existing_fields_and_approves_admin():
    repo = InMemoryProfiles(Profile.new("u1", full_name="박민수", username="park"))
    svc = ProfileService(repo)

    upgraded = svc.create_or_upgrade_profile(account_id="u1", role="admin")

    assert upgraded.full_name == "박민수"
    assert upgraded.username == "park"
    assert upgraded.role == Role.ADMIN
    assert upgraded.approved is True


def test_list_profiles_orders_nameless_last():
    repo = InMemoryProfiles(Profile.new("u1"), Profile.new("u2", full_name="가나다"))
    svc = ProfileService(repo)

    ids = [p.profile_id for p in svc.list_profiles(current_role=Role.ADMIN)]

    assert ids == ["u2", "u1"]
