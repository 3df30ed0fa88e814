"""
Hydration Reminder Scheduler

Every SCHEDULER_CHECK_INTERVAL seconds, checks each subscription's local time
and sends a reminder to those inside a window that haven't been notified yet.
"""
import logging
import random
from collections import Counter
from datetime import datetime
from typing import Callable, Dict, NamedTuple, Optional, Sequence
import pytz
from apscheduler.schedulers.background import BackgroundScheduler

from .dedup import was_notification_sent_recently
from .enums import EntryOutcome
from .jitter import should_emit
from .registry import SubscriptionRegistry
from .scheduler_config import (
    REMINDER_HOURS,
    WINDOW_MINUTES,
    EMISSION_PROBABILITY,
    DEDUP_LOCKOUT_MINUTES,
    SCHEDULER_CHECK_INTERVAL,
)
from .schemas import Subscription
from .send import NotificationDispatcher
from .time_window import is_in_notification_window, utc_now

logger = logging.getLogger(__name__)

JOB_ID = "hydration_reminder_job"


class TickReport(NamedTuple):
    checked_at: datetime
    outcomes: Dict[EntryOutcome, int]

    @property
    def total(self) -> int:
        return sum(self.outcomes.values())

    def tally(self, outcome: EntryOutcome) -> int:
        return self.outcomes.get(outcome, 0)


class ReminderScheduler:
    def __init__(
        self,
        registry: SubscriptionRegistry,
        dispatcher: NotificationDispatcher,
        reminder_hours: Sequence[int] = REMINDER_HOURS,
        window_minutes: int = WINDOW_MINUTES,
        emission_probability: float = EMISSION_PROBABILITY,
        lockout_minutes: int = DEDUP_LOCKOUT_MINUTES,
        interval_seconds: int = SCHEDULER_CHECK_INTERVAL,
        rng: Callable[[], float] = random.random,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.registry = registry
        self.dispatcher = dispatcher
        self.reminder_hours = sorted(reminder_hours)
        if not self.reminder_hours:
            raise ValueError("reminder_hours must not be empty")
        self.window_minutes = window_minutes
        self.emission_probability = emission_probability
        self.lockout_minutes = lockout_minutes
        self.interval_seconds = interval_seconds
        self.rng = rng
        self.clock = clock
        self._scheduler: Optional[BackgroundScheduler] = None

    def process_subscription(self, subscription: Subscription, now: datetime) -> EntryOutcome:
        """Window -> dedup -> jitter -> dispatch for a single subscription."""
        # Removed earlier in this tick (unregistered or pruned)
        if self.registry.get(subscription.id) is not subscription:
            return EntryOutcome.gone

        match = is_in_notification_window(
            subscription.timezone, now, self.reminder_hours, self.window_minutes
        )
        if not match.in_window:
            return EntryOutcome.outside_window

        if was_notification_sent_recently(subscription.last_notification_sent, now, self.lockout_minutes):
            return EntryOutcome.already_sent

        if not should_emit(self.emission_probability, self.rng):
            return EntryOutcome.skipped

        logger.debug(f"Subscription {subscription.id}: in window for {match.target_hour}:00, sending")
        if self.dispatcher.dispatch(subscription, now):
            return EntryOutcome.sent
        if subscription.id not in self.registry:
            return EntryOutcome.pruned
        return EntryOutcome.failed

    def run_tick(self, now: Optional[datetime] = None) -> TickReport:
        """
        Main job: evaluate every subscription registered at tick start.

        Called periodically by the scheduler. One failing subscription never
        stops the others.
        """
        now = now or self.clock()
        outcomes: Counter = Counter()

        subscriptions = self.registry.snapshot()
        if not subscriptions:
            return TickReport(now, dict(outcomes))

        logger.info(f"Checking notifications... ({len(subscriptions)} subscriptions)")

        for subscription in subscriptions:
            try:
                outcome = self.process_subscription(subscription, now)
            except Exception as e:
                logger.error(f"Error processing subscription {subscription.id}: {e}", exc_info=True)
                outcome = EntryOutcome.error
            outcomes[outcome] += 1

        report = TickReport(now, dict(outcomes))
        if any(report.tally(o) for o in (EntryOutcome.sent, EntryOutcome.failed, EntryOutcome.pruned, EntryOutcome.error)):
            logger.info(
                f"Tick complete: {report.tally(EntryOutcome.sent)} sent, "
                f"{report.tally(EntryOutcome.failed)} failed, "
                f"{report.tally(EntryOutcome.pruned)} pruned, "
                f"{report.tally(EntryOutcome.error)} errors"
            )
        return report

    def _run_job(self) -> None:
        self.run_tick()

    def start_scheduler(self) -> None:
        """Start the periodic reminder job. Ticks never overlap."""
        self._scheduler = BackgroundScheduler(timezone=pytz.utc)
        self._scheduler.add_job(
            self._run_job,
            'interval',
            seconds=self.interval_seconds,
            id=JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()

        first, last = self.reminder_hours[0], self.reminder_hours[-1]
        logger.info(
            f"🚀 Scheduler started: checking every {self.interval_seconds}s. "
            f"Notification schedule: every hour from {first}:00 to {last}:00 (user's timezone), "
            f"random window: ±{self.window_minutes} minutes around each hour"
        )

    def stop_scheduler(self) -> None:
        """Stop the scheduler gracefully."""
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
            logger.info("🛑 Scheduler stopped")

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running
