from datetime import datetime, timedelta
from typing import Optional

from .scheduler_config import DEDUP_LOCKOUT_MINUTES
from .time_window import as_utc, utc_now


def was_notification_sent_recently(
    last_sent: Optional[datetime],
    now: Optional[datetime] = None,
    lockout_minutes: int = DEDUP_LOCKOUT_MINUTES,
) -> bool:
    """
    True if the current hourly window is already covered by the last send.

    Only elapsed time is compared: a lockout shorter than the hourly
    recurrence but longer than a window allows one send per slot.
    """
    if last_sent is None:
        return False

    elapsed = as_utc(now or utc_now()) - as_utc(last_sent)
    return elapsed < timedelta(minutes=lockout_minutes)
