from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class AttendanceKey:
    """One attendance slot: a date, a service and a department."""

    date: date
    service_type: str
    department: str


@dataclass(frozen=True)
class AttendanceRecord:
    """도메인 엔티티: 출석 기록 (교인 1명 x 슬롯 1개)."""

    attendance_id: int
    member_id: str
    date: date
    service_type: str
    department: str

    @property
    def key(self) -> AttendanceKey:
        return AttendanceKey(self.date, self.service_type, self.department)
