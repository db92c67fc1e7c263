"""
Timezone utility functions
"""
from datetime import date, datetime, time, timedelta
import pytz


DEFAULT_TIMEZONE = 'America/Sao_Paulo'


def utcnow():
    """Timezone-aware current UTC time"""
    return datetime.now(pytz.UTC)


def get_timezone(tz_name):
    """Resolve a timezone name, falling back to the board default"""
    try:
        return pytz.timezone(tz_name or DEFAULT_TIMEZONE)
    except pytz.UnknownTimeZoneError:
        return pytz.timezone(DEFAULT_TIMEZONE)


def convert_utc_to_user_tz(utc_datetime, user_timezone):
    """Convert UTC datetime to user's timezone"""
    if not utc_datetime:
        return None

    if utc_datetime.tzinfo is None:
        utc_datetime = pytz.UTC.localize(utc_datetime)

    return utc_datetime.astimezone(get_timezone(user_timezone))


def parse_date(value):
    """Accept a date, a datetime or an ISO 'YYYY-MM-DD...' string"""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def parse_time(value):
    """Accept a time or an 'HH:MM' string"""
    if not value:
        return None
    if isinstance(value, time):
        return value
    try:
        return datetime.strptime(str(value)[:5], '%H:%M').time()
    except ValueError:
        return None


def due_datetime(due_date, due_time=None, tz_name=DEFAULT_TIMEZONE):
    """
    Combine a task's local due date and time into an aware UTC datetime.

    A missing time means the end of the due day.
    """
    day = parse_date(due_date)
    if day is None:
        return None

    moment = parse_time(due_time) or time(23, 59, 59)
    local = get_timezone(tz_name).localize(datetime.combine(day, moment))
    return local.astimezone(pytz.UTC)


def is_overdue(due_date, due_time=None, now=None, tz_name=DEFAULT_TIMEZONE):
    """True once the due moment has passed"""
    deadline = due_datetime(due_date, due_time, tz_name)
    if deadline is None:
        return False
    return deadline < (now or utcnow())


def is_due_soon(due_date, due_time=None, now=None, hours=24, tz_name=DEFAULT_TIMEZONE):
    """True when the deadline falls within the next `hours` and is not overdue yet"""
    deadline = due_datetime(due_date, due_time, tz_name)
    if deadline is None:
        return False
    now = now or utcnow()
    return now <= deadline <= now + timedelta(hours=hours)
