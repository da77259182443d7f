"""Generate an empty daily/weekly task list skeleton."""

from taskcollect.temporal.dates import MONDAY, DateRange, Week, YMD, gen_dates


def generate_task_list_template(start: YMD, end: YMD) -> str:
    """List every day from ``start`` to ``end``, with a week line before each Monday.

    Raises:
        InvalidRangeError: If ``start`` is later than ``end``.
    """
    date_range = DateRange(start, end)
    lines: list[str] = []
    for current in gen_dates(date_range.start, date_range.end):
        if current.weekday() == MONDAY:
            lines.append(f"- {Week.from_ymd(current)}")
        lines.append(f"- {current}")
    return "".join(f"{line}\n" for line in lines)
