"""Web-push delivery to the devices registered for a tournament."""

import asyncio
import json
import logging
from typing import Any, Dict, Optional, Protocol

from pydantic import Field
from pywebpush import WebPushException, webpush

from models import BatchResult, PushSubscription
from database.repositories import PushSubscriptionRepositoryDB

logger = logging.getLogger(__name__)

ICON_URL = "/icon-192.png"
BADGE_URL = "/badge-72.png"

# Push services answer 410 Gone once a browser has dropped the subscription.
GONE = 410


class PushDeliveryError(Exception):
    """A push service refused one delivery."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_gone(self) -> bool:
        return self.status_code == GONE


class PushTransport(Protocol):
    """Sends one signed push message. Raises PushDeliveryError on refusal."""

    async def send(self, subscription: Dict[str, Any], payload: str) -> None:
        ...


class WebPushTransport:
    """VAPID-signed delivery through pywebpush.

    pywebpush is blocking, so each send runs in the default executor.
    """

    def __init__(self, private_key: str, subject: str):
        self._private_key = private_key
        self._claims = {"sub": subject}

    def _send_blocking(self, subscription: Dict[str, Any], payload: str) -> None:
        try:
            webpush(
                subscription_info=subscription,
                data=payload,
                vapid_private_key=self._private_key,
                vapid_claims=dict(self._claims),
            )
        except WebPushException as e:
            status = e.response.status_code if e.response is not None else None
            raise PushDeliveryError(str(e), status_code=status) from e

    async def send(self, subscription: Dict[str, Any], payload: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._send_blocking, subscription, payload)


class PushResult(BatchResult):
    """Outcome of one push batch.

    `sent` counts the subscriptions a delivery was attempted for, not the
    ones that succeeded; `succeeded` has the confirmed count.
    """
    success: bool = True
    sent: int = 0
    removed: int = 0
    message: Optional[str] = None


def build_payload(title: str, message: str, url: str = "/") -> str:
    return json.dumps({
        "title": title,
        "message": message,
        "body": message,
        "icon": ICON_URL,
        "badge": BADGE_URL,
        "url": url,
    })


class PushGateway:
    """Looks up subscriptions, delivers to each concurrently, prunes gone endpoints."""

    def __init__(
        self,
        subscriptions: PushSubscriptionRepositoryDB,
        transport: Optional[PushTransport],
    ):
        self._subscriptions = subscriptions
        # None when VAPID keys are not configured.
        self._transport = transport

    @property
    def configured(self) -> bool:
        return self._transport is not None

    async def send(
        self,
        tournament_id: str,
        title: str,
        message: str,
        *,
        user_id: Optional[str] = None,
        exclude_user_id: Optional[str] = None,
    ) -> PushResult:
        if self._transport is None:
            logger.info("Push notifications not configured (missing VAPID keys)")
            return PushResult(sent=0, message="Push notifications not configured")

        subscriptions = await self._subscriptions.find_for_tournament(
            tournament_id, user_id=user_id, exclude_user_id=exclude_user_id
        )
        if not subscriptions:
            logger.info("No push subscriptions for tournament %s", tournament_id)
            return PushResult(sent=0)

        payload = build_payload(title, message)
        result = PushResult(sent=len(subscriptions))
        await asyncio.gather(*(self._deliver(sub, payload, result) for sub in subscriptions))
        logger.info(
            "Push batch for tournament %s: %d attempted, %d delivered, %d removed",
            tournament_id, result.sent, result.succeeded, result.removed,
        )
        return result

    async def _deliver(self, sub: PushSubscription, payload: str, result: PushResult) -> None:
        try:
            await self._transport.send(sub.subscription, payload)
        except Exception as e:
            logger.warning("Push to user %s failed: %s", sub.user_id, e)
            result.record(sub.endpoint, e)
            if isinstance(e, PushDeliveryError) and e.is_gone:
                await self._prune(sub, result)
            return
        result.record(sub.endpoint)

    async def _prune(self, sub: PushSubscription, result: PushResult) -> None:
        try:
            if sub.id:
                removed = await self._subscriptions.delete(sub.id)
            else:
                removed = await self._subscriptions.delete_by_endpoint(sub.endpoint)
        except Exception:
            logger.exception("Could not remove expired push subscription %s", sub.endpoint)
            return
        if removed:
            result.removed += 1
            logger.info("Removed expired push subscription for user %s", sub.user_id)
