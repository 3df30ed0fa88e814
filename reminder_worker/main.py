import logging
import time
from typing import NamedTuple

from .config import config
from .registry import SubscriptionRegistry
from .scheduler import ReminderScheduler
from .send import NotificationDispatcher
from .transport import WebPushTransport

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class Worker(NamedTuple):
    registry: SubscriptionRegistry
    transport: WebPushTransport
    dispatcher: NotificationDispatcher
    scheduler: ReminderScheduler


def build_worker() -> Worker:
    """Wire one registry into the dispatcher and scheduler."""
    registry = SubscriptionRegistry()
    transport = WebPushTransport.from_config(config)
    dispatcher = NotificationDispatcher(registry, transport)
    scheduler = ReminderScheduler(registry, dispatcher)
    return Worker(registry, transport, dispatcher, scheduler)


def start_worker() -> None:
    """Run the reminder scheduler until interrupted."""
    worker = build_worker()
    logger.info("💧 Drink Water Reminder worker starting")
    logger.info(f"VAPID public key: {worker.transport.vapid_public_key}")
    worker.scheduler.start_scheduler()

    try:
        while True:
            time.sleep(1)
    except (KeyboardInterrupt, SystemExit):
        logger.info("Shutting down...")
    finally:
        worker.scheduler.stop_scheduler()


if __name__ == "__main__":
    start_worker()
