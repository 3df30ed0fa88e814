"""
Registration service.

Transport-neutral operations behind subscribe / unsubscribe / test-send /
status. An HTTP layer only has to translate requests into these calls.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from .exceptions import SubscriptionNotFoundError
from .processors.message import map_locale_to_language
from .registry import SubscriptionRegistry
from .schemas import RegistrationRequest, Subscription
from .send import NotificationDispatcher
from .time_window import utc_now
from .transport import WebPushTransport

logger = logging.getLogger(__name__)


def register(
    registry: SubscriptionRegistry,
    subscription: Mapping[str, Any],
    timezone: str,
    locale: Optional[str] = None,
) -> str:
    """
    Add a push subscription.

    Raises:
        pydantic.ValidationError: missing subscription or timezone
    """
    request = RegistrationRequest(subscription=dict(subscription or {}), timezone=timezone, locale=locale)
    entry = Subscription(
        subscription=request.subscription,
        timezone=request.timezone,
        locale=request.locale,
    )
    registry.add(entry)

    lang = map_locale_to_language(entry.locale)
    logger.info(
        f"New subscription added: {entry.id} "
        f"(Timezone: {entry.timezone}, Locale: {entry.locale}, Lang: {lang})"
    )
    logger.info(f"Total subscriptions: {registry.count()}")
    return entry.id


def unregister(registry: SubscriptionRegistry, subscription_id: str) -> bool:
    """Remove a subscription. False if the id is unknown."""
    if not registry.remove(subscription_id):
        return False
    logger.info(f"Subscription removed: {subscription_id}")
    logger.info(f"Total subscriptions: {registry.count()}")
    return True


def send_test_notification(
    registry: SubscriptionRegistry,
    dispatcher: NotificationDispatcher,
    subscription_id: str,
) -> bool:
    """Send immediately, ignoring window, dedup and jitter."""
    entry = registry.get(subscription_id)
    if entry is None:
        raise SubscriptionNotFoundError(subscription_id)

    success = dispatcher.dispatch(entry)
    if success:
        logger.info(f"Test notification sent to {subscription_id}")
    return success


def status(registry: SubscriptionRegistry, now: Optional[datetime] = None) -> Dict[str, Any]:
    return {
        "totalSubscriptions": registry.count(),
        "serverTime": (now or utc_now()).isoformat(),
    }


def vapid_public_key(transport: WebPushTransport) -> str:
    """Application server key the browser needs to create a subscription."""
    return transport.vapid_public_key
