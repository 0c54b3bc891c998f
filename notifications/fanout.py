"""Broadcast one event to every other player in a tournament."""

import asyncio
import logging
from typing import Optional

from models import BatchResult, Notification, NotificationType
from models.base import BaseGolfModel
from database.repositories import NotificationRepositoryDB, PlayerRepositoryDB
from notifications.push import PushGateway, PushResult

logger = logging.getLogger(__name__)


class FanoutEvent(BaseGolfModel):
    """Something players should hear about. The sender is never notified."""
    sender_id: str
    tournament_id: str
    type: NotificationType
    title: str
    message: str
    push_title: Optional[str] = None  # defaults to `title`


class FanoutResult(BatchResult):
    """Per-recipient notification outcomes plus the push batch outcome."""
    recipients: int = 0
    push: Optional[PushResult] = None
    push_error: Optional[str] = None


class NotificationFanout:

    def __init__(
        self,
        players: PlayerRepositoryDB,
        notifications: NotificationRepositoryDB,
        push: PushGateway,
    ):
        self._players = players
        self._notifications = notifications
        self._push = push

    async def broadcast(self, event: FanoutEvent) -> FanoutResult:
        """Create a notification per recipient, then push once.

        Never raises: every failure ends up in the returned result and the log.
        """
        result = FanoutResult()
        try:
            players = await self._players.get_players_by_tournament(event.tournament_id)
        except Exception as e:
            logger.exception("Could not load recipients for tournament %s", event.tournament_id)
            result.record(f"tournament:{event.tournament_id}", e)
            return result

        recipients = [p for p in players if p.id != event.sender_id]
        result.recipients = len(recipients)
        await asyncio.gather(*(self._notify(p.id, event, result) for p in recipients))

        try:
            result.push = await self._push.send(
                event.tournament_id,
                event.push_title or event.title,
                event.message,
                exclude_user_id=event.sender_id,
            )
        except Exception as e:
            logger.exception("Push delivery failed for tournament %s", event.tournament_id)
            result.push_error = f"{type(e).__name__}: {e}"

        if result.failed:
            logger.warning(
                "%d of %d %s notifications failed for tournament %s",
                result.failed, result.recipients, event.type.value, event.tournament_id,
            )
        return result

    async def notify_one(self, player_id: str, event: FanoutEvent) -> FanoutResult:
        """In-app notification for a single player, without push. Never raises."""
        result = FanoutResult(recipients=1)
        await self._notify(player_id, event, result)
        return result

    async def _notify(self, player_id: str, event: FanoutEvent, result: FanoutResult) -> None:
        try:
            await self._notifications.create_notification(Notification(
                player_id=player_id,
                tournament_id=event.tournament_id,
                type=event.type,
                title=event.title,
                message=event.message,
            ))
        except Exception as e:
            logger.warning("Notification for player %s failed: %s", player_id, e)
            result.record(player_id, e)
            return
        result.record(player_id)
