import sys
import os
from datetime import datetime
import pytest
import pytz

# Add project root to sys.path
sys.path.append(os.getcwd())

from llm.config import config as llm_config
from reminder_worker.enums import DeliveryStatus
from reminder_worker.registry import SubscriptionRegistry
from reminder_worker.schemas import Subscription
from reminder_worker.send import NotificationDispatcher
from reminder_worker.transport import DeliveryResult

FIXED_NOW = datetime(2026, 1, 15, 7, 46, tzinfo=pytz.utc)

PUSH_SUBSCRIPTION = {
    "endpoint": "https://fcm.googleapis.com/fcm/send/abc123",
    "keys": {"p256dh": "BNcRdreALRFXTkOOUHK1EtK2wtaz5Ry4YfYCA_0QTpQtUbVlUls0VJXg7A8u-Ts1XbjhazAkj7I99e8QcYP7DkM", "auth": "tBHItJI5svbpez7KI4CCXg"},
}


class FakeTransport:
    """Records deliveries and answers with a fixed (or per-call) result."""

    def __init__(self, results=None):
        self.results = list(results or [])
        self.calls = []

    def deliver(self, subscription_info, payload):
        self.calls.append((subscription_info, payload))
        if self.results:
            result = self.results.pop(0)
            if isinstance(result, Exception):
                raise result
            return result
        return DeliveryResult(DeliveryStatus.ok)


def make_subscription(timezone="UTC", locale="en_US", **kwargs):
    return Subscription(subscription=dict(PUSH_SUBSCRIPTION), timezone=timezone, locale=locale, **kwargs)


@pytest.fixture(autouse=True)
def no_llm_credentials(monkeypatch):
    """Tests never reach the network; the fallback path is the default."""
    monkeypatch.setattr(llm_config, "GROQ_API_KEY", None)


@pytest.fixture
def registry():
    return SubscriptionRegistry()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def dispatcher(registry, transport):
    return NotificationDispatcher(
        registry,
        transport,
        generate_message=lambda locale: "Time to hydrate!",
        clock=lambda: FIXED_NOW,
    )
