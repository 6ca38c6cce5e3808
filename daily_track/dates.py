"""Calendar helpers working on ``YYYY-MM-DD`` strings.

Every function that depends on "now" accepts an explicit reference date so
callers (and tests) can pin the calendar; only the outermost entry points fall
back to the system clock.
"""

import re
from datetime import date, datetime, timedelta

from .errors import InvalidDate, ValidationError

WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")

# Sunday=0 ... Saturday=6
_DAY_TOKENS = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def format_date(value):
    return value.strftime("%Y-%m-%d")


def system_today():
    return date.today()


def as_date(value):
    if value is None:
        return system_today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(value)


def today(now=None):
    return format_date(as_date(now))


def is_valid_date_string(value):
    if not isinstance(value, str) or not _DATE_PATTERN.fullmatch(value):
        return False
    year, month, day = (int(part) for part in value.split("-"))
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def parse_date(value):
    if not is_valid_date_string(value):
        raise InvalidDate()
    year, month, day = (int(part) for part in value.split("-"))
    return date(year, month, day)


def weekday_of(value):
    day = as_date(value)
    return _DAY_TOKENS[day.isoweekday() % 7]


def current_week_dates(today=None):
    reference = as_date(today)
    # Weeks start on Monday; Sunday closes the week begun six days earlier
    monday = reference - timedelta(days=reference.weekday())
    return [format_date(monday + timedelta(days=i)) for i in range(7)]


def normalize_frequency(values):
    if not isinstance(values, list) or not values:
        raise ValidationError("Frequency must be a non-empty list of days")
    if any(value not in WEEKDAYS for value in values):
        raise ValidationError(f"Frequency must contain valid days: {', '.join(WEEKDAYS)}")
    return [day for day in WEEKDAYS if day in values]
