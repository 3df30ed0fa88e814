"""
Scheduler Configuration for Hydration Reminders

Defines reminder hours, window sizes and scheduler settings.
Every value can be overridden through the environment.
"""
import os
from typing import List, Optional

from .config import env_path  # noqa: F401  loads .env.dev first


def _parse_hours(raw: Optional[str]) -> List[int]:
    """Parse a comma-separated hour list like "8,9,10" into sorted unique ints."""
    if not raw:
        return []
    hours = {int(part) for part in raw.split(",") if part.strip()}
    for hour in hours:
        if not 0 <= hour <= 23:
            raise ValueError(f"REMINDER_HOURS entry out of range 0-23: {hour}")
    return sorted(hours)


# Local hours at which a reminder is due (8am - 8pm)
REMINDER_HOURS: List[int] = _parse_hours(os.getenv("REMINDER_HOURS")) or list(range(8, 21))

# Half-window around each reminder hour, in minutes (window is HH-1:45 .. HH:15)
WINDOW_MINUTES = int(os.getenv("WINDOW_MINUTES", "15"))

# Chance per tick that an eligible subscription is notified
EMISSION_PROBABILITY = float(os.getenv("EMISSION_PROBABILITY", "0.10"))

# Minimum minutes between two sends to the same subscription
DEDUP_LOCKOUT_MINUTES = int(os.getenv("DEDUP_LOCKOUT_MINUTES", "50"))

# How often the scheduler checks subscriptions (in seconds)
SCHEDULER_CHECK_INTERVAL = int(os.getenv("SCHEDULER_CHECK_INTERVAL", "60"))

# Generated messages longer than this are truncated with "..."
MESSAGE_MAX_LENGTH = int(os.getenv("MESSAGE_MAX_LENGTH", "60"))

# Adjacent windows would overlap at 30 minutes or more
if not 0 <= WINDOW_MINUTES < 30:
    raise ValueError(f"WINDOW_MINUTES must be in [0, 30), got {WINDOW_MINUTES}")
if not 0 < EMISSION_PROBABILITY <= 1:
    raise ValueError(f"EMISSION_PROBABILITY must be in (0, 1], got {EMISSION_PROBABILITY}")
if DEDUP_LOCKOUT_MINUTES <= 0:
    raise ValueError(f"DEDUP_LOCKOUT_MINUTES must be positive, got {DEDUP_LOCKOUT_MINUTES}")
if SCHEDULER_CHECK_INTERVAL <= 0:
    raise ValueError(f"SCHEDULER_CHECK_INTERVAL must be positive, got {SCHEDULER_CHECK_INTERVAL}")
