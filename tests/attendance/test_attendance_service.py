from __future__ import annotations

from datetime import date

import pytest

from src.church_attendance.church_attendance.attendance.model import AttendanceKey
from src.church_attendance.church_attendance.attendance.service import AttendanceService
from src.church_attendance.church_attendance.core.exceptions import StoreError, ValidationError
from src.church_attendance.church_attendance.members.model import Member

from tests.fakes import InMemoryAttendance, InMemoryMembers

KEY = AttendanceKey(date(2026, 3, 1), "주일3부", "청년부")


def _service():
    attendance = InMemoryAttendance()
    members = InMemoryMembers(Member("m1", "김철수", "청년부"), Member("m2", "이영희", "청년부"))
    return AttendanceService(attendance, members), attendance


def test_save_twice_is_idempotent():
    svc, repo = _service()

    svc.save_attendance(date="2026-03-01", service_type="주일3부", department="청년부", member_ids=["m1", "m2"])
    svc.save_attendance(date="2026-03-01", service_type="주일3부", department="청년부", member_ids=["m1", "m2"])

    assert sorted(repo.list_member_ids(KEY)) == ["m1", "m2"]
    assert repo.count_all() == 2


def test_save_replaces_previous_selection():
    svc, repo = _service()

    svc.save_attendance(date="2026-03-01", service_type="주일3부", department="청년부", member_ids=["m1", "m2"])
    svc.save_attendance(date="2026-03-01", service_type="주일3부", department="청년부", member_ids=["m2"])

    assert repo.list_member_ids(KEY) == ["m2"]


def test_empty_selection_clears_slot_only():
    svc, repo = _service()
    other = AttendanceKey(date(2026, 3, 1), "주일1부", "청년부")
    repo.replace_for_key(other, ["m1"])

    svc.save_attendance(date="2026-03-01", service_type="주일3부", department="청년부", member_ids=["m1"])
    svc.save_attendance(date="2026-03-01", service_type="주일3부", department="청년부", member_ids=[])

    assert repo.list_member_ids(KEY) == []
    assert repo.list_member_ids(other) == ["m1"]


def test_duplicate_ids_stored_once():
    svc, repo = _service()

    svc.save_attendance(date=date(2026, 3, 1), service_type="주일3부", department="청년부", member_ids=["m1", "m1", "m2"])

    assert repo.list_member_ids(KEY) == ["m1", "m2"]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"date": None, "service_type": "주일3부", "department": "청년부", "member_ids": ["m1"]},
        {"date": "2026-03-01", "service_type": "", "department": "청년부", "member_ids": ["m1"]},
        {"date": "2026-03-01", "service_type": "주일3부", "department": None, "member_ids": ["m1"]},
        {"date": "2026-03-01", "service_type": "주일3부", "department": "청년부", "member_ids": None},
        {"date": "2026-03-01", "service_type": "주일3부", "department": "청년부", "member_ids": "m1"},
    ],
)
def test_missing_fields_rejected_before_store_access(kwargs):
    svc, repo = _service()

    with pytest.raises(ValidationError):
        svc.save_attendance(**kwargs)

    assert repo.replace_calls == 0


def test_bad_date_and_unknown_service_rejected():
    svc, repo = _service()

    with pytest.raises(ValidationError):
        svc.save_attendance(date="03/01/2026", service_type="주일3부", department="청년부", member_ids=["m1"])
    with pytest.raises(ValidationError):
        svc.save_attendance(date="2026-03-01", service_type="새벽기도", department="청년부", member_ids=["m1"])

    assert repo.replace_calls == 0


def test_failed_insert_keeps_previous_rows():
    svc, repo = _service()
    svc.save_attendance(date="2026-03-01", service_type="주일3부", department="청년부", member_ids=["m1"])

    repo.fail_on_insert = True
    with pytest.raises(StoreError):
        svc.save_attendance(date="2026-03-01", service_type="주일3부", department="청년부", member_ids=["m2"])

    assert repo.list_member_ids(KEY) == ["m1"]


def test_members_of_department_sorted_by_name():
    svc, _ = _service()

    names = [m.name for m in svc.members_of("청년부")]

    assert names == ["김철수", "이영희"]
