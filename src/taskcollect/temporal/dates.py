"""Calendar date values, inclusive date ranges and Monday-to-Sunday weeks.

All values are local calendar dates. There is no time-of-day or timezone
component anywhere in this module.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta

DATE_FORMAT = "%Y/%m/%d"
DATE_RANGE_DELIMITER = " ~ "

# Strict YYYY/MM/DD, zero-padded
_DATE_RE = re.compile(r"^(\d{4})/(\d{2})/(\d{2})$")

MONDAY = 0
SUNDAY = 6


class DateFormatError(ValueError):
    """A string is not a strict YYYY/MM/DD calendar date."""


class InvalidRangeError(ValueError):
    """A date range whose start is later than its end."""


class InvalidWeekRangeError(InvalidRangeError):
    """A date range that is not exactly Monday to the following Sunday."""


@dataclass(frozen=True, order=True)
class YMD:
    """An immutable year/month/day triple ordered by (year, month, day).

    Construction never validates the calendar: values produced by date
    arithmetic are trusted, and ``to_date`` normalises any overflow.
    """

    year: int
    month: int
    day: int

    @classmethod
    def today(cls) -> YMD:
        return cls.from_date(date.today())

    @classmethod
    def from_date(cls, d: date) -> YMD:
        return cls(d.year, d.month, d.day)

    @classmethod
    def parse(cls, text: str) -> YMD:
        """Parse a strict ``YYYY/MM/DD`` string.

        Raises:
            DateFormatError: If the text is not zero-padded YYYY/MM/DD or does
                not name a real calendar date.
        """
        match = _DATE_RE.match(text)
        if not match:
            raise DateFormatError(f"Invalid date format: {text!r}")
        year, month, day = (int(g) for g in match.groups())
        try:
            date(year, month, day)
        except ValueError as e:
            raise DateFormatError(f"Invalid date: {text!r} ({e})") from e
        return cls(year, month, day)

    def to_date(self) -> date:
        """Convert to a ``datetime.date``, rolling out-of-range months/days over."""
        years, month_index = divmod(self.month - 1, 12)
        first = date(self.year + years, month_index + 1, 1)
        return first + timedelta(days=self.day - 1)

    def add_days(self, days: int) -> YMD:
        return YMD.from_date(self.to_date() + timedelta(days=days))

    def weekday(self) -> int:
        """Day of week, Monday is 0 and Sunday is 6."""
        return self.to_date().weekday()

    def __str__(self) -> str:
        return self.to_date().strftime(DATE_FORMAT)


@dataclass(frozen=True)
class DateRange:
    """An inclusive ``[start, end]`` range of calendar dates.

    ``start`` and ``end`` correspond to the ``from``/``to`` bounds of a range.
    """

    start: YMD
    end: YMD

    def __post_init__(self) -> None:
        if self.start.to_date() > self.end.to_date():
            raise InvalidRangeError(f"Invalid date range (from: {self.start}, to: {self.end})")

    def does_include(self, target: YMD | DateRange) -> bool:
        """Return True if a date, or both ends of a range, fall within this range."""
        if isinstance(target, DateRange):
            return self.does_include(target.start) and self.does_include(target.end)
        return self.start.to_date() <= target.to_date() <= self.end.to_date()

    def __str__(self) -> str:
        return f"{self.start}{DATE_RANGE_DELIMITER}{self.end}"


@dataclass(frozen=True)
class Week(DateRange):
    """A date range running from a Monday to the Sunday six days later."""

    def __post_init__(self) -> None:
        super().__post_init__()
        if not Week.is_week_range(self):
            raise InvalidWeekRangeError(f"Invalid week range: {self}")

    @staticmethod
    def is_week_range(date_range: DateRange) -> bool:
        return (
            date_range.start.weekday() == MONDAY
            and date_range.end.to_date() == date_range.start.to_date() + timedelta(days=6)
        )

    @classmethod
    def from_range(cls, date_range: DateRange) -> Week:
        return cls(date_range.start, date_range.end)

    @classmethod
    def from_ymd(cls, ymd: YMD) -> Week:
        """Return the Monday-to-Sunday week containing ``ymd``."""
        monday = ymd.add_days(-ymd.weekday())
        return cls(monday, monday.add_days(6))


def gen_dates(start: YMD, end: YMD) -> Iterator[YMD]:
    """Yield every date from ``start`` to ``end`` inclusive."""
    current = start.to_date()
    last = end.to_date()
    while current <= last:
        yield YMD.from_date(current)
        current += timedelta(days=1)
