"""Calendar and lifespan arithmetic for the progress grids.

Every function here is pure: "now" is always passed in explicitly and
timezone handling happens once, in ``local_date``, before any day
difference is taken.

Key numbers:
  - A year view counts days, 1-indexed (Jan 1 is day 1).
  - A life view counts whole weeks since birth, 0-indexed.
  - An expected lifespan is 80 years x 52 weeks = 4160 weeks.
"""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

LIFE_EXPECTANCY_YEARS = 80
WEEKS_PER_YEAR = 52
TOTAL_LIFE_WEEKS = LIFE_EXPECTANCY_YEARS * WEEKS_PER_YEAR  # 4160

DateLike = date | datetime


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a display would: 0.5 always goes up (no banker's rounding)."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def days_in_month(year: int, month: int) -> int:
    """Days in ``month`` (1-12) of ``year``."""
    return calendar.monthrange(year, month)[1]


def first_weekday(day: date, monday_first: bool = False) -> int:
    """Column index of ``day`` within a week row.

    Sunday-first weeks put Sunday at 0; Monday-first weeks shift every
    index by -1 mod 7 so Monday lands at 0 and Sunday at 6.
    """
    sunday_first = (day.weekday() + 1) % 7
    if monday_first:
        return (sunday_first - 1) % 7
    return sunday_first


def resolve_timezone(name: str | tzinfo) -> tzinfo:
    """Resolve an IANA name (or ``"UTC"``) into a tzinfo.

    Raises ValueError for unknown identifiers.
    """
    if isinstance(name, tzinfo):
        return name
    key = name.strip()
    if key.upper() in {"UTC", "Z", "GMT"}:
        return timezone.utc
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name!r}") from e


def local_date(value: DateLike, tz: str | tzinfo | None = None) -> date:
    """Reduce a date or datetime to the calendar date observed in ``tz``.

    Plain dates are already calendar dates and pass through. Naive
    datetimes are taken to be UTC when a timezone is supplied; without a
    timezone a datetime keeps its own wall-clock date.
    """
    if isinstance(value, datetime):
        if tz is not None:
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            value = value.astimezone(resolve_timezone(tz))
        return value.date()
    return value


@dataclass(frozen=True)
class YearProgress:
    year: int
    current_day_of_year: int
    total_days_in_year: int
    days_left: int

    @property
    def percent(self) -> int:
        """Whole-number share of the year elapsed, counting today."""
        return int(round_half_up(self.current_day_of_year / self.total_days_in_year * 100))


@dataclass(frozen=True)
class LifeProgress:
    weeks_lived: int
    life_percentage: float
    weeks_remaining: int


def derive_year_progress(
    reference_date: DateLike, timezone: str | tzinfo | None = None
) -> YearProgress:
    """Day-of-year, year length and days left for ``reference_date``."""
    today = local_date(reference_date, timezone)
    start_of_year = date(today.year, 1, 1)
    current = (today - start_of_year).days + 1
    total = days_in_year(today.year)
    return YearProgress(
        year=today.year,
        current_day_of_year=current,
        total_days_in_year=total,
        days_left=total - current,
    )


def derive_life_progress(
    birth_date: DateLike,
    reference_date: DateLike,
    timezone: str | tzinfo | None = None,
) -> LifeProgress:
    """Whole weeks lived, percentage of 4160 weeks, and weeks remaining.

    A birth date after the reference date clamps to zero weeks lived.
    """
    birth = local_date(birth_date, timezone)
    today = local_date(reference_date, timezone)
    weeks_lived = max(0, (today - birth).days // 7)
    return LifeProgress(
        weeks_lived=weeks_lived,
        life_percentage=round_half_up(weeks_lived / TOTAL_LIFE_WEEKS * 100, 1),
        weeks_remaining=max(0, TOTAL_LIFE_WEEKS - weeks_lived),
    )


@dataclass(frozen=True)
class TemporalContext:
    """Everything the planner and composer need to know about "now"."""

    reference_date: date
    timezone: str | None
    current_day_of_year: int
    total_days_in_year: int
    days_left_in_year: int
    weeks_lived: int = 0
    life_percentage: float = 0.0
    total_life_weeks: int = TOTAL_LIFE_WEEKS

    @classmethod
    def derive(
        cls,
        reference: DateLike,
        timezone: str | None = None,
        birth_date: DateLike | None = None,
    ) -> TemporalContext:
        year = derive_year_progress(reference, timezone)
        life = (
            derive_life_progress(birth_date, reference, timezone)
            if birth_date is not None
            else LifeProgress(0, 0.0, TOTAL_LIFE_WEEKS)
        )
        return cls(
            reference_date=local_date(reference, timezone),
            timezone=timezone,
            current_day_of_year=year.current_day_of_year,
            total_days_in_year=year.total_days_in_year,
            days_left_in_year=year.days_left,
            weeks_lived=life.weeks_lived,
            life_percentage=life.life_percentage,
        )

    @property
    def year(self) -> int:
        return self.reference_date.year

    @property
    def year_percent(self) -> int:
        return YearProgress(
            self.year,
            self.current_day_of_year,
            self.total_days_in_year,
            self.days_left_in_year,
        ).percent

    @property
    def weeks_remaining(self) -> int:
        return max(0, self.total_life_weeks - self.weeks_lived)
