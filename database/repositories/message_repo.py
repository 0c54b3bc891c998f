"""Append-only chat messages (social.messages)."""

import asyncpg
from typing import List
from uuid import UUID

from models import Message
from database.converters import message_from_row
from database.exceptions import IntegrityError


class MessageRepositoryDB:

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def create_message(self, message: Message) -> Message:
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO social.messages (tournament_id, player_id, player_name, message)
                       VALUES ($1, $2, $3, $4) RETURNING *""",
                    UUID(message.tournament_id), UUID(message.player_id),
                    message.player_name, message.message,
                )
                return message_from_row(row)
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(f"Unknown tournament or player for message: {e}") from e

    async def get_messages_by_tournament(self, tournament_id: str) -> List[Message]:
        """Messages oldest first."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM social.messages
                   WHERE tournament_id = $1 ORDER BY timestamp ASC""",
                UUID(tournament_id),
            )
            return [message_from_row(r) for r in rows]
