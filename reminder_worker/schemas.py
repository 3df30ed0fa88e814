import uuid
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator

# =========================================================
# PYDANTIC SCHEMAS
# =========================================================

DEFAULT_LOCALE = "en_US"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# Registration Schemas
class RegistrationRequest(BaseModel):
    subscription: Dict[str, Any]
    timezone: str = Field(min_length=1)
    locale: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("subscription")
    @classmethod
    def subscription_not_empty(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        if not value:
            raise ValueError("subscription must not be empty")
        return value

    @field_validator("locale")
    @classmethod
    def default_locale(cls, value: Optional[str]) -> str:
        return value or DEFAULT_LOCALE


# Subscription (registry entry)
class Subscription(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    subscription: Dict[str, Any]
    timezone: str
    locale: str = DEFAULT_LOCALE
    subscribed_at: datetime = Field(default_factory=_utc_now)
    last_notification_sent: Optional[datetime] = None


# Push payload, as the service worker reads it
class NotificationPayload(BaseModel):
    title: str
    body: str
    icon: str
    badge: str
    timestamp: int
