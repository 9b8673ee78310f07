from __future__ import annotations

from datetime import date, datetime, timedelta

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise ValidationError("날짜 형식이 올바르지 않습니다 (YYYY-MM-DD)")


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def current_sunday(today: date) -> date:
    # date.weekday(): Monday=0 ... Sunday=6
    return today - timedelta(days=(today.weekday() + 1) % 7)


def last_sundays(today: date, count: int = 4) -> list[date]:
    """Most recent `count` Sundays, oldest first; today counts if it is a Sunday."""
    latest = current_sunday(today)
    return [latest - timedelta(weeks=i) for i in reversed(range(count))]


def short_label(value: date) -> str:
    return f"{value.month}/{value.day}"
