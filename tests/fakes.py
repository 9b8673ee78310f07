from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from src.church_attendance.church_attendance.accounts.model import Account
from src.church_attendance.church_attendance.attendance.model import AttendanceKey
from src.church_attendance.church_attendance.core.exceptions import StoreError
from src.church_attendance.church_attendance.members.model import Member
from src.church_attendance.church_attendance.profiles.model import Profile


class InMemoryAccounts:
    def __init__(self):
        self.by_id: dict[str, Account] = {}

    def get_by_id(self, account_id: str) -> Optional[Account]:
        return self.by_id.get(account_id)

    def get_by_email(self, email: str) -> Optional[Account]:
        for account in self.by_id.values():
            if account.email == email:
                return account
        return None

    def create(self, *, account_id: str, email: str, password_hash: str) -> Account:
        account = Account(account_id=account_id, email=email, password_hash=password_hash)
        self.by_id[account_id] = account
        return account


class InMemoryProfiles:
    def __init__(self, *profiles: Profile):
        self.by_id: dict[str, Profile] = {p.profile_id: p for p in profiles}
        self.fail = False

    def _check(self):
        if self.fail:
            raise StoreError("connection refused")

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        self._check()
        return self.by_id.get(profile_id)

    def get_by_username(self, username: str) -> Optional[Profile]:
        self._check()
        for p in self.by_id.values():
            if p.username == username:
                return p
        return None

    def insert(self, profile: Profile) -> Profile:
        self._check()
        if profile.profile_id in self.by_id:
            raise StoreError(f"Duplicate entry '{profile.profile_id}' for key 'PRIMARY'")
        self.by_id[profile.profile_id] = profile
        return profile

    def update(self, profile: Profile) -> bool:
        self._check()
        if profile.profile_id not in self.by_id:
            return False
        self.by_id[profile.profile_id] = profile
        return True

    def set_approved(self, profile_id: str, *, approved: bool) -> bool:
        self._check()
        existing = self.by_id.get(profile_id)
        if not existing:
            return False
        self.by_id[profile_id] = existing.with_changes(approved=approved)
        return True

    def delete_by_id(self, profile_id: str) -> bool:
        self._check()
        return self.by_id.pop(profile_id, None) is not None

    def list_all(self) -> Sequence[Profile]:
        self._check()
        return sorted(self.by_id.values(), key=lambda p: (p.full_name is None, p.full_name or ""))

    def count_all(self) -> int:
        self._check()
        return len(self.by_id)


class InMemoryMembers:
    def __init__(self, *members: Member):
        self.members = list(members)

    def list_by_department(self, department: str) -> Sequence[Member]:
        return sorted((m for m in self.members if m.department == department), key=lambda m: m.name)


class InMemoryAttendance:
    """Rows are (member_id, key). replace_for_key is all-or-nothing like the MySQL one."""

    def __init__(self):
        self.rows: list[tuple[str, AttendanceKey]] = []
        self.fail_on_insert = False
        self.fail_on_read: set[date] = set()
        self.replace_calls = 0

    def list_member_ids(self, key: AttendanceKey) -> Sequence[str]:
        return [m for m, k in self.rows if k == key]

    def replace_for_key(self, key: AttendanceKey, member_ids: Sequence[str]) -> None:
        self.replace_calls += 1
        kept = [(m, k) for m, k in self.rows if k != key]
        if self.fail_on_insert and member_ids:
            raise StoreError("Duplicate entry for key 'uq_attendance'")
        self.rows = kept + [(m, key) for m in member_ids]

    def list_member_ids_on(self, day: date) -> Sequence[str]:
        if day in self.fail_on_read:
            raise StoreError("Lost connection to MySQL server during query")
        return [m for m, k in self.rows if k.date == day]

    def count_all(self) -> int:
        return len(self.rows)

    def count_on(self, day: date) -> int:
        return len([1 for _, k in self.rows if k.date == day])
