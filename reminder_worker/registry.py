"""
Subscription Registry

In-memory store of active push subscriptions. One instance is owned by the
worker and handed to both the scheduler and the registration service.
"""
import threading
from datetime import datetime
from typing import Callable, Dict, Iterator, List, Optional

from .schemas import Subscription
from .time_window import as_utc


class SubscriptionRegistry:
    def __init__(self) -> None:
        self._subscriptions: Dict[str, Subscription] = {}
        self._lock = threading.Lock()

    def add(self, subscription: Subscription) -> str:
        with self._lock:
            if subscription.id in self._subscriptions:
                raise ValueError(f"Subscription {subscription.id} already registered")
            self._subscriptions[subscription.id] = subscription
        return subscription.id

    def remove(self, subscription_id: str) -> bool:
        with self._lock:
            return self._subscriptions.pop(subscription_id, None) is not None

    def get(self, subscription_id: str) -> Optional[Subscription]:
        with self._lock:
            return self._subscriptions.get(subscription_id)

    def count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def snapshot(self) -> List[Subscription]:
        """Entries registered right now. Later adds/removes don't affect the list."""
        with self._lock:
            return list(self._subscriptions.values())

    def for_each(self, fn: Callable[[Subscription], None]) -> None:
        """
        Call fn for every entry present at the start of the traversal.

        Entries removed while the traversal runs (including by fn itself)
        are skipped once removed.
        """
        for subscription in self.snapshot():
            if self.get(subscription.id) is not subscription:
                continue
            fn(subscription)

    def mark_sent(self, subscription_id: str, sent_at: datetime) -> bool:
        """
        Record a successful send. last_notification_sent only moves forward
        and is stored as aware UTC; naive values are read as UTC.

        Returns False if the subscription is no longer registered.
        """
        with self._lock:
            subscription = self._subscriptions.get(subscription_id)
            if subscription is None:
                return False
            sent_at = as_utc(sent_at)
            last_sent = subscription.last_notification_sent
            if last_sent is None or sent_at > as_utc(last_sent):
                subscription.last_notification_sent = sent_at
            return True

    def __contains__(self, subscription_id: object) -> bool:
        with self._lock:
            return subscription_id in self._subscriptions

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Subscription]:
        return iter(self.snapshot())
