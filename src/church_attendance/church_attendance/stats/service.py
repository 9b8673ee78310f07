from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import last_sundays, short_label
from ..core.constants import DEFAULT_DASHBOARD_SUNDAYS
from ..core.exceptions import StoreError
from ..profiles.repository import ProfileRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SundayCount:
    date: date
    label: str
    count: int

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "label": self.label, "count": self.count}


@dataclass(frozen=True)
class Overview:
    total_users: int
    total_attendance: int
    today_attendance: int


class StatisticsService:
    def __init__(self, attendance: AttendanceRepository, profiles: ProfileRepository):
        self._attendance = attendance
        self._profiles = profiles

    def sunday_series(self, today: date, *, weeks: int = DEFAULT_DASHBOARD_SUNDAYS) -> list[SundayCount]:
        """Distinct members present on each of the last `weeks` Sundays, oldest first.

        A Sunday whose rows cannot be fetched is reported as 0 so the chart
        always has one bar per week.
        """
        series: list[SundayCount] = []
        for sunday in last_sundays(today, weeks):
            try:
                member_ids = self._attendance.list_member_ids_on(sunday)
            except StoreError as e:
                logger.warning("attendance fetch failed for %s: %s", sunday.isoformat(), e)
                count = 0
            else:
                count = len(set(member_ids))
            series.append(SundayCount(date=sunday, label=short_label(sunday), count=count))
        return series

    def overview(self, today: date) -> Overview:
        return Overview(
            total_users=self._profiles.count_all(),
            total_attendance=self._attendance.count_all(),
            today_attendance=self._attendance.count_on(today),
        )
