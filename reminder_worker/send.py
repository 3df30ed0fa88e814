"""
Notification Dispatcher

Builds the push payload for one subscription, hands it to the transport and
applies the outcome to the registry: success stamps last_notification_sent,
a permanent-invalid answer removes the subscription.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from .config import config
from .enums import DeliveryStatus
from .processors.message import NOTIFICATION_TITLES, generate_reminder_message, map_locale_to_language
from .registry import SubscriptionRegistry
from .schemas import NotificationPayload, Subscription
from .time_window import utc_now
from .transport import DeliveryResult, subscription_endpoint

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    def __init__(
        self,
        registry: SubscriptionRegistry,
        transport,
        generate_message: Callable[[Optional[str]], str] = generate_reminder_message,
        clock: Callable[[], datetime] = utc_now,
        icon: str = config.NOTIFICATION_ICON,
        badge: str = config.NOTIFICATION_BADGE,
    ) -> None:
        self.registry = registry
        self.transport = transport
        self.generate_message = generate_message
        self.clock = clock
        self.icon = icon
        self.badge = badge

    def build_payload(self, subscription: Subscription, message: str, now: datetime) -> NotificationPayload:
        lang = map_locale_to_language(subscription.locale)
        return NotificationPayload(
            title=NOTIFICATION_TITLES[lang],
            body=message,
            icon=self.icon,
            badge=self.badge,
            timestamp=int(now.timestamp() * 1000),
        )

    def _deliver(self, subscription: Subscription, payload: NotificationPayload) -> DeliveryResult:
        try:
            return self.transport.deliver(subscription.subscription, payload.model_dump_json())
        except Exception as e:
            # Transports are expected to classify failures themselves
            logger.error(f"Transport raised for {subscription.id}: {e}", exc_info=True)
            return DeliveryResult(DeliveryStatus.error, message=str(e))

    def dispatch(self, subscription: Subscription, now: Optional[datetime] = None) -> bool:
        """
        Send a reminder to one subscription.

        `now` stamps both the payload and last_notification_sent (defaults to the clock).

        Returns:
            bool: True if the push service accepted the message
        """
        lang = map_locale_to_language(subscription.locale)
        now = now or self.clock()
        message = self.generate_message(subscription.locale)
        payload = self.build_payload(subscription, message, now)

        result = self._deliver(subscription, payload)

        if result.status == DeliveryStatus.ok:
            self.registry.mark_sent(subscription.id, now)
            logger.info(
                f"Notification sent to {subscription.id} ({subscription.timezone}, {lang}): \"{message}\""
            )
            return True

        endpoint = subscription_endpoint(subscription.subscription)
        logger.error(
            f"Failed to send notification to {subscription.id} "
            f"(status={result.status_code}, endpoint={endpoint}): {result.message}"
        )

        if result.status == DeliveryStatus.invalid:
            logger.info(f"Removing invalid subscription: {subscription.id}")
            self.registry.remove(subscription.id)

        return False
