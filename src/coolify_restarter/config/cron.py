"""Crontab expressions with standard cron day-of-week numbering.

APScheduler numbers weekdays from Monday (0 = mon) while cron numbers them from
Sunday (0 and 7 = sun). The day-of-week field is expanded to weekday names
before it reaches CronTrigger, so existing schedule strings fire on the same
days they do under cron.
"""

import re

from apscheduler.triggers.cron import CronTrigger

CRON_DAY_NAMES = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")

_DOW_TOKEN = re.compile(r"^(?:(?P<any>\*)|(?P<first>[0-9a-z]+)(?:-(?P<last>[0-9a-z]+))?)(?:/(?P<step>\d+))?$")


def _day_number(value: str) -> int:
    """Cron weekday number 0-7 for a digit or a three-letter name."""
    if value.isdigit():
        number = int(value)
        if number > 7:
            raise ValueError(f"Day of week {number} is out of range (0-7)")
        return number
    if value in CRON_DAY_NAMES:
        return CRON_DAY_NAMES.index(value)
    raise ValueError(f"Invalid day of week: {value!r}")


def convert_day_of_week(field: str) -> str:
    """Rewrite a cron day-of-week field as APScheduler weekday names."""
    field = field.strip().lower()
    if field in ("*", "?"):
        return "*"

    days: set[int] = set()
    for token in field.split(","):
        match = _DOW_TOKEN.match(token)
        if not match:
            raise ValueError(f"Invalid day of week expression: {token!r}")
        step = int(match.group("step") or 1)
        if step < 1:
            raise ValueError(f"Invalid step in day of week expression: {token!r}")
        if match.group("any"):
            first, last = 0, 6
        else:
            first = _day_number(match.group("first"))
            if match.group("last") is not None:
                last = _day_number(match.group("last"))
            elif match.group("step"):
                last = 6
            else:
                last = first
        if first > last:
            raise ValueError(f"Day of week range {token!r} runs backwards")
        days.update(day % 7 for day in range(first, last + 1, step))

    return ",".join(CRON_DAY_NAMES[day] for day in sorted(days))


def cron_trigger(expression: str, timezone=None) -> CronTrigger:
    """Build a CronTrigger from a 5-field crontab expression.

    Raises ValueError for anything that is not a valid 5-field expression.
    """
    fields = expression.split()
    if len(fields) != 5:
        raise ValueError(f"Wrong number of fields; got {len(fields)}, expected 5")
    minute, hour, day, month, day_of_week = fields
    return CronTrigger(
        minute=minute,
        hour=hour,
        day=day,
        month=month,
        day_of_week=convert_day_of_week(day_of_week),
        timezone=timezone,
    )
