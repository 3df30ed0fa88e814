"""
Timezone window evaluation.

A subscription is due when its local time falls inside the window around one
of the reminder hours: the last WINDOW_MINUTES of the preceding hour or the
first WINDOW_MINUTES of the reminder hour itself (07:45 - 08:15 for 8am).
"""
import logging
from datetime import datetime
from typing import NamedTuple, Optional, Sequence, Tuple
import pytz

from .scheduler_config import REMINDER_HOURS, WINDOW_MINUTES

logger = logging.getLogger(__name__)


class WindowMatch(NamedTuple):
    in_window: bool
    target_hour: Optional[int] = None


NO_MATCH = WindowMatch(in_window=False)


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if moment.tzinfo is None:
        return pytz.utc.localize(moment)
    return moment.astimezone(pytz.utc)


def get_time_in_timezone(timezone: str, now: Optional[datetime] = None) -> Optional[Tuple[int, int]]:
    """
    Local (hour, minute) for `now` in the given IANA timezone.

    Returns None when the timezone cannot be resolved.
    """
    try:
        tz = pytz.timezone(timezone)
    except (pytz.UnknownTimeZoneError, AttributeError, TypeError, ValueError) as e:
        logger.warning(f"Invalid timezone: {timezone!r} ({e})")
        return None

    local = as_utc(now or utc_now()).astimezone(tz)
    return local.hour, local.minute


def is_in_notification_window(
    timezone: str,
    now: Optional[datetime] = None,
    reminder_hours: Sequence[int] = REMINDER_HOURS,
    window_minutes: int = WINDOW_MINUTES,
) -> WindowMatch:
    """Check whether `now` falls into a reminder window in the given timezone."""
    local_time = get_time_in_timezone(timezone, now)
    if local_time is None:
        return NO_MATCH

    hour, minute = local_time

    for reminder_hour in sorted(reminder_hours):
        # Window for 8am is 07:45 - 08:15; hour 0 wraps back to 23:45
        previous_hour = (reminder_hour - 1) % 24
        in_window = (
            (hour == previous_hour and minute >= 60 - window_minutes)
            or (hour == reminder_hour and minute <= window_minutes)
        )
        if in_window:
            return WindowMatch(in_window=True, target_hour=reminder_hour)

    return NO_MATCH
