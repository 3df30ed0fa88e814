from .registry import SubscriptionRegistry
from .scheduler import ReminderScheduler, TickReport
from .send import NotificationDispatcher
from .transport import WebPushTransport, DeliveryResult
from .registration import register, unregister, send_test_notification, status, vapid_public_key
