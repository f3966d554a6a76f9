from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value).strip())


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()


def add_years(value: date, years: int) -> date:
    # 29/02 rolls forward to 01/03 when the target year is not a leap year.
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        return date(value.year + years, 3, 1)


def calculate_age(birth_date: date, *, today: Optional[date] = None) -> int:
    """Age in full years, one less while this year's birthday is still ahead."""
    today = today or today_local()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def to_iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None
