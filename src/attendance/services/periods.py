"""Pay-period arithmetic.

A period runs from the 21st of one month through the 20th of the next. Every
calendar date falls into exactly one period; periods are only ever derived,
never stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from functools import lru_cache
from operator import attrgetter
from typing import Callable, Iterable, Optional, TypeVar
from zoneinfo import ZoneInfo

from ..config import settings

PERIOD_START_DAY = 21
PERIOD_END_DAY = 20

WEEKDAY_NAMES = ("الاثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت", "الأحد")

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Period:
    start: date
    end: date

    @property
    def label(self) -> str:
        return f"فترة: {format_date(self.start)} إلى {format_date(self.end)}"

    def contains(self, value: date | datetime) -> bool:
        return self.start <= local_date(value) <= self.end


@lru_cache(maxsize=8)
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def local_date(value: date | datetime, tz_name: Optional[str] = None) -> date:
    """Calendar date of a value; aware datetimes are converted to local time first."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            tz_name = tz_name or settings.timezone
            value = value.astimezone(_zone(tz_name)) if tz_name else value.astimezone()
        return value.date()
    return value


def format_date(value: date | datetime) -> str:
    day = local_date(value)
    return f"{day.day}/{day.month}/{day.year}"


def day_name(value: date | datetime) -> str:
    return WEEKDAY_NAMES[local_date(value).weekday()]


def period_for(value: date | datetime) -> Period:
    day = local_date(value)
    start_year, start_month = day.year, day.month
    if day.day <= PERIOD_END_DAY:
        start_month -= 1
        if start_month == 0:
            start_month = 12
            start_year -= 1

    if start_month == 12:
        end_year, end_month = start_year + 1, 1
    else:
        end_year, end_month = start_year, start_month + 1

    return Period(
        start=date(start_year, start_month, PERIOD_START_DAY),
        end=date(end_year, end_month, PERIOD_END_DAY),
    )


def period_label_for(value: date | datetime) -> str:
    return period_for(value).label


def group_by_period(
    records: Iterable[T],
    key: Callable[[T], date | datetime] = attrgetter("date"),
) -> dict[str, list[T]]:
    """Bucket records by period label.

    Buckets appear in first-seen order and each keeps the input order of its
    records, so callers sort before grouping when they want chronology.
    """
    groups: dict[str, list[T]] = {}
    for record in records:
        groups.setdefault(period_label_for(key(record)), []).append(record)
    return groups
