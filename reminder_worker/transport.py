"""
Web Push transport.

Wraps pywebpush and reports each delivery as ok / invalid / error instead of
raising, so the dispatcher can prune gone subscriptions and keep the rest.
"""
import base64
import logging
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple

import requests
from cryptography.hazmat.primitives import serialization
from py_vapid import Vapid
from pywebpush import WebPushException, webpush

from .config import ReminderWorkerConfig, config as default_config
from .enums import DeliveryStatus
from .exceptions import PushDeliveryError, PushGoneError

logger = logging.getLogger(__name__)

# 404 Not Found / 410 Gone: the push service dropped the subscription
GONE_STATUS_CODES = (404, 410)


class DeliveryResult(NamedTuple):
    status: DeliveryStatus
    status_code: Optional[int] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == DeliveryStatus.ok


def _b64url(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def generate_vapid_keys() -> Tuple[str, str]:
    """New (public, private) VAPID key pair, both base64url encoded."""
    vapid = Vapid()
    vapid.generate_keys()
    public_key = vapid.public_key.public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.UncompressedPoint,
    )
    private_key = vapid.private_key.private_numbers().private_value.to_bytes(32, "big")
    return _b64url(public_key), _b64url(private_key)


def resolve_vapid_keys(cfg: ReminderWorkerConfig) -> Tuple[str, str]:
    """Configured VAPID keys, or a fresh pair valid for this process only."""
    if cfg.has_vapid_keys:
        return cfg.VAPID_PUBLIC_KEY, cfg.VAPID_PRIVATE_KEY

    public_key, private_key = generate_vapid_keys()
    logger.warning(
        "=== VAPID KEYS GENERATED ===\n"
        f"Public Key: {public_key}\n"
        "Existing subscriptions become invalid on restart. Set these as environment variables:\n"
        f'export VAPID_PUBLIC_KEY="{public_key}"\n'
        'export VAPID_PRIVATE_KEY="<generated private key>"'
    )
    return public_key, private_key


class WebPushTransport:
    def __init__(
        self,
        vapid_public_key: str,
        vapid_private_key: str,
        vapid_subject: str,
        ttl: int = 86400,
        timeout: float = 15,
    ) -> None:
        self.vapid_public_key = vapid_public_key
        self.vapid_private_key = vapid_private_key
        self.vapid_claims = {"sub": vapid_subject}
        self.ttl = ttl
        self.timeout = timeout

    @classmethod
    def from_config(cls, cfg: Optional[ReminderWorkerConfig] = None) -> "WebPushTransport":
        cfg = cfg or default_config
        public_key, private_key = resolve_vapid_keys(cfg)
        return cls(
            vapid_public_key=public_key,
            vapid_private_key=private_key,
            vapid_subject=cfg.VAPID_SUBJECT,
            ttl=cfg.PUSH_TTL,
            timeout=cfg.PUSH_TIMEOUT,
        )

    def deliver(self, subscription_info: Mapping[str, Any], payload: str) -> DeliveryResult:
        """
        Send one push message.

        Arguments:
            subscription_info (dict): Browser PushSubscription JSON (endpoint + keys).
            payload (str): JSON-encoded notification payload.
        """
        try:
            self._send_push(subscription_info, payload)
        except PushGoneError as e:
            return DeliveryResult(DeliveryStatus.invalid, e.status_code, str(e))
        except PushDeliveryError as e:
            return DeliveryResult(DeliveryStatus.error, e.status_code, str(e))
        return DeliveryResult(DeliveryStatus.ok)

    def _send_push(self, subscription_info: Mapping[str, Any], payload: str) -> None:
        """
        Raises:
            PushGoneError: If the push service returned 404/410
            PushDeliveryError: If delivery failed for any other reason
        """
        try:
            webpush(
                subscription_info=dict(subscription_info),
                data=payload,
                vapid_private_key=self.vapid_private_key,
                # webpush fills in aud/exp on the dict it gets
                vapid_claims=dict(self.vapid_claims),
                ttl=self.ttl,
                timeout=self.timeout,
            )
        except WebPushException as e:
            response = getattr(e, "response", None)
            status_code = getattr(response, "status_code", None)
            if status_code in GONE_STATUS_CODES:
                raise PushGoneError(str(e), status_code) from e
            raise PushDeliveryError(str(e), status_code) from e
        except requests.Timeout as e:
            raise PushDeliveryError(f"Push request timed out: {e}") from e
        except requests.RequestException as e:
            raise PushDeliveryError(f"Push request failed: {e}") from e
        except Exception as e:
            raise PushDeliveryError(str(e)) from e


def subscription_endpoint(subscription_info: Dict[str, Any]) -> str:
    endpoint = subscription_info.get("endpoint") or "?"
    return endpoint[:60]
