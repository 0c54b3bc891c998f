"""In-app notifications (social.notifications)."""

import asyncpg
from typing import List
from uuid import UUID

from models import Notification
from database.converters import notification_from_row, notification_to_row
from database.exceptions import IntegrityError, NotFoundError


class NotificationRepositoryDB:
    """Notifications are created by fan-out; clients only flip `read` or delete."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def create_notification(self, notification: Notification) -> Notification:
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO social.notifications
                           (tournament_id, player_id, type, title, message, read)
                       VALUES ($1, $2, $3, $4, $5, $6) RETURNING *""",
                    *notification_to_row(notification),
                )
                return notification_from_row(row)
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(
                f"Notification recipient {notification.player_id} or tournament "
                f"{notification.tournament_id} does not exist"
            ) from e

    async def get_notifications_by_player(self, player_id: str) -> List[Notification]:
        """Newest first."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM social.notifications
                   WHERE player_id = $1 ORDER BY timestamp DESC""",
                UUID(player_id),
            )
            return [notification_from_row(r) for r in rows]

    async def mark_read(self, notification_id: str) -> None:
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "UPDATE social.notifications SET read = TRUE WHERE id = $1",
                UUID(notification_id),
            )
            if result == "UPDATE 0":
                raise NotFoundError(f"Notification {notification_id} not found")

    async def delete_notification(self, notification_id: str) -> bool:
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM social.notifications WHERE id = $1", UUID(notification_id)
            )
            return result == "DELETE 1"

    async def clear_for_player(self, player_id: str) -> int:
        """Delete all of a player's notifications. Returns how many were removed."""
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM social.notifications WHERE player_id = $1", UUID(player_id)
            )
            return int(result.split()[-1])
