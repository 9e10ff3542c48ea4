from datetime import datetime, date, timedelta, timezone

# Civil dates are taken in Thailand time.
SCHOOL_TZ = timezone(timedelta(hours=7))

# Monday..Friday, indexed like date.weekday()
WEEKDAYS = ("จันทร์", "อังคาร", "พุธ", "พฤหัสบดี", "ศุกร์")

WEEKDAY_ALIASES = {
    "monday": "จันทร์", "mon": "จันทร์",
    "tuesday": "อังคาร", "tue": "อังคาร", "tues": "อังคาร",
    "wednesday": "พุธ", "wed": "พุธ",
    "thursday": "พฤหัสบดี", "thu": "พฤหัสบดี", "thurs": "พฤหัสบดี",
    "friday": "ศุกร์", "fri": "ศุกร์",
}


def normalize_weekday(value):
    """Return the canonical weekday name, or None if it is not a school day."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    if value in WEEKDAYS:
        return value
    return WEEKDAY_ALIASES.get(value.lower())


def weekday_name(day):
    """Weekday name for a date, or None on Saturday/Sunday."""
    index = day.weekday()
    return WEEKDAYS[index] if index < len(WEEKDAYS) else None


def parse_civil_date(value):
    """
    Parse a YYYY-MM-DD string (or an ISO datetime) into a school calendar date.

    Aware datetimes are converted to school time before the date is taken.
    Raises ValueError on anything unparseable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return value
    else:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Empty date")
        value = value.strip()
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            parsed = datetime.fromisoformat(value)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(SCHOOL_TZ)
    return parsed.date()


def day_bounds(day):
    """Half-open range [day, next day) for date-column filters."""
    return day, day + timedelta(days=1)
