# core/election_clock.py

"""
Election lifecycle clock.

Turns an election record and an explicit "now" into a lifecycle status
and a countdown string. All civil dates and times are Ghana time, which
is UTC+0 with no daylight saving, so they map field-for-field onto UTC.
The functions here never read the system clock.
"""

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

import pytz

from core.config import settings
from core.errors import ElectionRecordError
from models.election import ElectionClockResult, ElectionRecord
from models.enums import ElectionStatus

GHANA_TZ = pytz.timezone(settings.ELECTION_DISPLAY_TIMEZONE)

ENDED_MESSAGE = "Election has ended"
READY_TO_ACTIVATE_MESSAGE = "Election ready to activate"
LOADING_MESSAGE = "Loading..."
TIME_CALCULATION_ERROR = "Time calculation error"

_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$", re.ASCII)
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{1,2})(?::\d{1,2})?$", re.ASCII)


# -----------------------------------------------------
# Parsing
# -----------------------------------------------------
def parse_civil_date(value: Optional[str]) -> date:
    if not isinstance(value, str):
        raise ElectionRecordError(f"Missing election date: {value!r}")

    match = _DATE_RE.match(value.strip())
    if not match:
        raise ElectionRecordError(f"Invalid election date {value!r}, expected YYYY-MM-DD")

    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError as e:
        raise ElectionRecordError(f"Invalid election date {value!r}: {e}") from e


def parse_civil_time(value: Optional[str]) -> time:
    if not isinstance(value, str):
        raise ElectionRecordError(f"Missing election time: {value!r}")

    match = _TIME_RE.match(value.strip())
    if not match:
        raise ElectionRecordError(f"Invalid election time {value!r}, expected HH:MM")

    try:
        return time(int(match.group(1)), int(match.group(2)))
    except ValueError as e:
        raise ElectionRecordError(f"Invalid election time {value!r}: {e}") from e


def parse_date_time(date_str: Optional[str], time_str: Optional[str]) -> datetime:
    """Combine civil `YYYY-MM-DD` and `HH:MM` into a UTC instant."""
    return datetime.combine(
        parse_civil_date(date_str),
        parse_civil_time(time_str),
        tzinfo=timezone.utc,
    )


def to_utc_instant(now: datetime) -> datetime:
    """
    Normalize the caller's clock reading to a whole-second UTC instant.
    Naive datetimes are taken to already hold UTC wall-clock fields.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    return now.replace(microsecond=0)


def target_instant(record: ElectionRecord) -> datetime:
    """End of voting for an active election, start of voting otherwise."""
    if record.is_active:
        return parse_date_time(
            record.end_date or record.date,
            record.end_time or settings.DEFAULT_END_TIME,
        )
    return parse_date_time(
        record.start_date or record.date,
        record.start_time or settings.DEFAULT_START_TIME,
    )


# -----------------------------------------------------
# Formatting
# -----------------------------------------------------
def format_duration(remaining: timedelta) -> str:
    """
    "{d}d {h}h {m}m {s}s" with zero-valued units left out.
    Seconds are always shown.
    """
    total_seconds = int(remaining.total_seconds())
    days, rest = divmod(total_seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    parts.append(f"{seconds}s")

    return " ".join(parts)


def format_date_for_display(value: datetime) -> str:
    """e.g. "15 May 2025" in Ghana time."""
    local = _to_ghana_time(value)
    return f"{local.day} {local.strftime('%B %Y')}"


def format_time_for_display(value: datetime) -> str:
    """e.g. "4:00 PM" in Ghana time."""
    local = _to_ghana_time(value)
    hour = local.hour % 12 or 12
    return f"{hour}:{local.minute:02d} {'AM' if local.hour < 12 else 'PM'}"


def _to_ghana_time(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = pytz.UTC.localize(value)
    return value.astimezone(GHANA_TZ)


# -----------------------------------------------------
# Status
# -----------------------------------------------------
def compute_status(record: ElectionRecord, now: datetime) -> ElectionClockResult:
    """
    Lifecycle status and countdown for `record` at instant `now`.

    - active, end passed            → ended, "Election has ended"
    - inactive, start passed        → not-started, "Election ready to activate"
    - otherwise                     → active / not-started with the countdown

    Raises ElectionRecordError when a date or time field is malformed.
    Callers must not pass a missing record.
    """
    target = target_instant(record)
    difference = target - to_utc_instant(now)

    if difference <= timedelta(0):
        if record.is_active:
            return ElectionClockResult(status=ElectionStatus.ended, display=ENDED_MESSAGE)
        return ElectionClockResult(status=ElectionStatus.not_started, display=READY_TO_ACTIVATE_MESSAGE)

    status = ElectionStatus.active if record.is_active else ElectionStatus.not_started
    return ElectionClockResult(
        status=status,
        remaining=difference,
        display=format_duration(difference),
    )


def fallback_election_record(today: date) -> ElectionRecord:
    """Record shown when the backend cannot be reached: today, 08:00–16:00, inactive."""
    day = today.isoformat()
    return ElectionRecord(
        title="Election",
        is_active=False,
        date=day,
        start_date=day,
        end_date=day,
        start_time=settings.DEFAULT_START_TIME,
        end_time=settings.DEFAULT_END_TIME,
    )
