from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceKey


class AttendanceRepository(Protocol):
    def list_member_ids(self, key: AttendanceKey) -> Sequence[str]:
        raise NotImplementedError

    def replace_for_key(self, key: AttendanceKey, member_ids: Sequence[str]) -> None:
        """Make the rows stored for `key` exactly `member_ids`.

        Delete and insert run in one transaction.
        """

        raise NotImplementedError

    def list_member_ids_on(self, day: date) -> Sequence[str]:
        """member_id of every row on `day`, across services and departments (may repeat)."""

        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError

    def count_on(self, day: date) -> int:
        raise NotImplementedError
