from datetime import datetime
import pytest
import pytz
from pydantic import ValidationError

from conftest import PUSH_SUBSCRIPTION, FakeTransport
from reminder_worker.enums import DeliveryStatus
from reminder_worker.exceptions import SubscriptionNotFoundError
from reminder_worker.registration import (
    register,
    send_test_notification,
    status,
    unregister,
    vapid_public_key,
)
from reminder_worker.transport import DeliveryResult, WebPushTransport


def test_register_then_unregister_restores_count(registry):
    before = registry.count()
    subscription_id = register(registry, PUSH_SUBSCRIPTION, "Europe/Prague", "cs_CZ")
    assert registry.count() == before + 1

    assert unregister(registry, subscription_id) is True
    assert registry.count() == before


def test_register_stores_metadata(registry):
    subscription_id = register(registry, PUSH_SUBSCRIPTION, "Europe/Prague", "cs_CZ")
    entry = registry.get(subscription_id)
    assert entry.subscription == PUSH_SUBSCRIPTION
    assert entry.timezone == "Europe/Prague"
    assert entry.locale == "cs_CZ"
    assert entry.last_notification_sent is None
    assert entry.subscribed_at.tzinfo is not None


def test_register_defaults_locale(registry):
    subscription_id = register(registry, PUSH_SUBSCRIPTION, "UTC")
    assert registry.get(subscription_id).locale == "en_US"


def test_register_accepts_unresolvable_timezone(registry):
    subscription_id = register(registry, PUSH_SUBSCRIPTION, "Nowhere/Special")
    assert subscription_id in registry


@pytest.mark.parametrize("subscription,timezone", [
    (None, "UTC"),
    ({}, "UTC"),
    (PUSH_SUBSCRIPTION, ""),
    (PUSH_SUBSCRIPTION, None),
])
def test_register_rejects_missing_fields(registry, subscription, timezone):
    with pytest.raises(ValidationError):
        register(registry, subscription, timezone)
    assert registry.count() == 0


def test_unregister_unknown_id(registry):
    assert unregister(registry, "does-not-exist") is False


def test_send_test_notification_ignores_window(registry, transport, dispatcher):
    # Honolulu at 07:46 UTC is 21:46, outside every window
    subscription_id = register(registry, PUSH_SUBSCRIPTION, "Pacific/Honolulu")
    assert send_test_notification(registry, dispatcher, subscription_id) is True
    assert len(transport.calls) == 1


def test_send_test_notification_unknown_id(registry, dispatcher):
    with pytest.raises(SubscriptionNotFoundError):
        send_test_notification(registry, dispatcher, "does-not-exist")


def test_send_test_notification_failure(registry):
    from reminder_worker.send import NotificationDispatcher

    transport = FakeTransport([DeliveryResult(DeliveryStatus.error, 500, "oops")])
    dispatcher = NotificationDispatcher(registry, transport, generate_message=lambda locale: "x")
    subscription_id = register(registry, PUSH_SUBSCRIPTION, "UTC")
    assert send_test_notification(registry, dispatcher, subscription_id) is False


def test_status(registry):
    register(registry, PUSH_SUBSCRIPTION, "UTC")
    now = datetime(2026, 1, 15, 7, 46, tzinfo=pytz.utc)
    assert status(registry, now) == {
        "totalSubscriptions": 1,
        "serverTime": "2026-01-15T07:46:00+00:00",
    }


def test_vapid_public_key():
    transport = WebPushTransport("public-key", "private-key", "mailto:test@example.com")
    assert vapid_public_key(transport) == "public-key"
