from typing import Optional


class PushDeliveryError(Exception):
    """Push delivery failed; the subscription may still be valid."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PushGoneError(PushDeliveryError):
    """Push service answered 404/410: the subscription no longer exists."""


class SubscriptionNotFoundError(KeyError):
    pass
