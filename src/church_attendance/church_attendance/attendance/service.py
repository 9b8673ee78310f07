from __future__ import annotations

import datetime
import logging
from collections.abc import Collection
from typing import Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..core.constants import SERVICE_TYPES
from ..core.exceptions import ValidationError
from ..members.model import Member
from ..members.repository import MemberRepository
from .model import AttendanceKey
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "날짜, 예배 종류, 부서, 출석 대상이 필요합니다."


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, members: MemberRepository):
        self._attendance = attendance
        self._members = members

    @staticmethod
    def build_key(*, date_value, service_type: Optional[str], department: Optional[str]) -> AttendanceKey:
        if not date_value or not service_type or not department:
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)
        if service_type not in SERVICE_TYPES:
            raise ValidationError("예배 종류가 올바르지 않습니다.")
        return AttendanceKey(coerce_date(date_value), service_type, department.strip())

    def save_attendance(
        self,
        *,
        date: datetime.date | str | None,
        service_type: Optional[str],
        department: Optional[str],
        member_ids,
    ) -> AttendanceKey:
        """Replace the attendance of one (date, service_type, department) slot.

        After success the slot holds exactly one row per id in member_ids; an
        empty collection clears the slot. Replaying the same call is a no-op.
        Store failures propagate as StoreError without retry.
        """
        if isinstance(member_ids, (str, bytes)) or not isinstance(member_ids, Collection):
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)
        key = self.build_key(date_value=date, service_type=service_type, department=department)

        unique_ids = list(dict.fromkeys(str(m) for m in member_ids if str(m).strip()))
        self._attendance.replace_for_key(key, unique_ids)
        logger.info(
            "attendance saved date=%s service=%s dept=%s members=%d",
            key.date.isoformat(), key.service_type, key.department, len(unique_ids),
        )
        return key

    def selected_member_ids(self, key: AttendanceKey) -> list[str]:
        return list(dict.fromkeys(self._attendance.list_member_ids(key)))

    def members_of(self, department: str) -> Sequence[Member]:
        return self._members.list_by_department(department)
