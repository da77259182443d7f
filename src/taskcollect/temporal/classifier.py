"""Classify the text of a root-level bullet as a Day or a Week range."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import TypeAlias

from taskcollect.temporal.dates import (
    DATE_RANGE_DELIMITER,
    DateFormatError,
    DateRange,
    InvalidRangeError,
    InvalidWeekRangeError,
    Week,
    YMD,
)

# Reasons recorded on malformed entries
REASON_INVALID_DATE = "invalid date format"
REASON_INVALID_RANGE_FORMAT = "invalid range format"
REASON_INVALID_RANGE = "invalid range"
REASON_INVALID_WEEK_RANGE = "invalid week range"


class TemporalClassificationError(ValueError):
    """Text that is neither a single date nor a Monday-to-Sunday range."""

    def __init__(self, reason: str, text: str) -> None:
        super().__init__(f"{reason}: {text!r}")
        self.reason = reason
        self.text = text


@dataclass(frozen=True)
class Day:
    """A single calendar day."""

    date: YMD

    @property
    def anchor(self) -> YMD:
        return self.date

    def does_include(self, ymd: YMD) -> bool:
        return self.date == ymd

    def __str__(self) -> str:
        return str(self.date)


@dataclass(frozen=True)
class WeekRange:
    """A Monday-to-Sunday week."""

    week: Week

    @property
    def anchor(self) -> YMD:
        return self.week.start

    def does_include(self, ymd: YMD) -> bool:
        return self.week.does_include(ymd)

    def __str__(self) -> str:
        return str(self.week)


Temporal: TypeAlias = Day | WeekRange


def parse_range(text: str) -> DateRange:
    """Parse ``"<date> ~ <date>"`` into a DateRange.

    Raises:
        TemporalClassificationError: On bad date syntax, a part count other
            than two, or a start later than the end.
    """
    parts = text.split(DATE_RANGE_DELIMITER)
    dates: list[YMD] = []
    for part in parts:
        try:
            dates.append(YMD.parse(part.strip()))
        except DateFormatError as e:
            raise TemporalClassificationError(REASON_INVALID_DATE, text) from e
    if len(dates) != 2:
        raise TemporalClassificationError(
            f"{REASON_INVALID_RANGE_FORMAT}: expected 2 dates, got {len(dates)}", text
        )
    try:
        return DateRange(dates[0], dates[1])
    except InvalidRangeError as e:
        raise TemporalClassificationError(REASON_INVALID_RANGE, text) from e


def classify_temporal(text: str) -> Temporal:
    """Interpret bullet text as a Day, falling back to a Week range.

    Raises:
        TemporalClassificationError: The text is malformed. ``reason`` tells
            format errors apart from a valid range that is not a week.
    """
    text = text.strip()
    with contextlib.suppress(DateFormatError):
        return Day(YMD.parse(text))

    date_range = parse_range(text)
    try:
        return WeekRange(Week.from_range(date_range))
    except InvalidWeekRangeError as e:
        raise TemporalClassificationError(REASON_INVALID_WEEK_RANGE, text) from e
