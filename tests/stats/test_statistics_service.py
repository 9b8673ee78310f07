from __future__ import annotations

from datetime import date

from src.church_attendance.church_attendance.attendance.model import AttendanceKey
from src.church_attendance.church_attendance.core.enums import Role
from src.church_attendance.church_attendance.profiles.model import Profile
from src.church_attendance.church_attendance.stats.service import StatisticsService

from tests.fakes import InMemoryAttendance, InMemoryProfiles

# Wednesday
TODAY = date(2026, 3, 18)


def test_series_has_four_sundays_oldest_first():
    svc = StatisticsService(InMemoryAttendance(), InMemoryProfiles())

    series = svc.sunday_series(TODAY)

    assert [p.date for p in series] == [date(2026, 2, 22), date(2026, 3, 1), date(2026, 3, 8), date(2026, 3, 15)]
    assert [p.label for p in series] == ["2/22", "3/1", "3/8", "3/15"]
    assert all(p.count == 0 for p in series)


def test_member_counted_once_per_sunday_across_services_and_departments():
    repo = InMemoryAttendance()
    sunday = date(2026, 3, 15)
    repo.replace_for_key(AttendanceKey(sunday, "주일1부", "청년부"), ["m1", "m2"])
    repo.replace_for_key(AttendanceKey(sunday, "주일3부", "청년부"), ["m1"])
    repo.replace_for_key(AttendanceKey(sunday, "주일3부", "유년부"), ["m1", "m3"])
    svc = StatisticsService(repo, InMemoryProfiles())

    series = svc.sunday_series(TODAY)

    assert series[-1].count == 3


def test_today_sunday_is_last_point():
    svc = StatisticsService(InMemoryAttendance(), InMemoryProfiles())

    series = svc.sunday_series(date(2026, 3, 15))

    assert series[-1].date == date(2026, 3, 15)


def test_failed_week_reported_as_zero():
    repo = InMemoryAttendance()
    repo.replace_for_key(AttendanceKey(date(2026, 3, 8), "주일3부", "청년부"), ["m1"])
    repo.replace_for_key(AttendanceKey(date(2026, 3, 15), "주일3부", "청년부"), ["m1", "m2"])
    repo.fail_on_read.add(date(2026, 3, 8))
    svc = StatisticsService(repo, InMemoryProfiles())

    counts = [p.count for p in svc.sunday_series(TODAY)]

    assert counts == [0, 0, 0, 2]


def test_overview_counts():
    repo = InMemoryAttendance()
    repo.replace_for_key(AttendanceKey(TODAY, "수요예배", "청년부"), ["m1", "m2"])
    repo.replace_for_key(AttendanceKey(date(2026, 3, 15), "주일3부", "청년부"), ["m1"])
    profiles = InMemoryProfiles(Profile.new("a1", role=Role.ADMIN), Profile.new("u1"))
    svc = StatisticsService(repo, profiles)

    overview = svc.overview(TODAY)

    assert overview.total_users == 2
    assert overview.total_attendance == 3
    assert overview.today_attendance == 2
