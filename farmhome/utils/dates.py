import calendar
from datetime import datetime, timezone


def utcnow():
    """Current time as a naive UTC datetime (the form pymongo hands back)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_date(value):
    """Parse a date or datetime value from a request body or CSV cell

    Accepts datetime objects, 'YYYY-MM-DD', and ISO 8601 strings with
    or without a 'Z'/offset suffix. Aware values are converted to naive UTC.

    Raises:
        ValueError: if the value cannot be parsed
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError('empty date')
        if 'T' in text or ' ' in text:
            parsed = datetime.fromisoformat(text.replace('Z', '+00:00'))
        else:
            parsed = datetime.strptime(text, '%Y-%m-%d')
    else:
        raise ValueError(f'unsupported date value: {value!r}')

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def months_between(start, end):
    """Whole calendar months from start to end, ignoring the day of month"""
    return (end.year - start.year) * 12 + (end.month - start.month)


def one_month_before(moment):
    """Same day and time one calendar month earlier, clamped to the month's last day"""
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)
