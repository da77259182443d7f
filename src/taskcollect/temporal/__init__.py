"""Calendar dates, week ranges and temporal classification."""

from taskcollect.temporal.classifier import Day, Temporal, WeekRange, classify_temporal
from taskcollect.temporal.dates import DateRange, Week, YMD, gen_dates

__all__ = [
    "DateRange",
    "Day",
    "Temporal",
    "Week",
    "WeekRange",
    "YMD",
    "classify_temporal",
    "gen_dates",
]
