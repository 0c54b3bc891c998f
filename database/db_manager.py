"""Entry point to the data layer: one repository per table over a shared pool."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import asyncpg

from database.exceptions import DatabaseError
from database.repositories import (
    CourseRepositoryDB,
    MessageRepositoryDB,
    NotificationRepositoryDB,
    PlayerRepositoryDB,
    PostRepositoryDB,
    PushSubscriptionRepositoryDB,
    RoundRepositoryDB,
    TournamentRepositoryDB,
)

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Groups the async repositories.

    Notes:
    - Repositories use raw SQL through asyncpg (no ORM) to keep behavior explicit.
    - Every repository shares the same pool; the manager owns no connections itself.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        self.pool = pool
        self.tournaments = TournamentRepositoryDB(pool)
        self.players = PlayerRepositoryDB(pool)
        self.courses = CourseRepositoryDB(pool)
        self.rounds = RoundRepositoryDB(pool)
        self.messages = MessageRepositoryDB(pool)
        self.posts = PostRepositoryDB(pool)
        self.notifications = NotificationRepositoryDB(pool)
        self.push_subscriptions = PushSubscriptionRepositoryDB(pool)

    async def initialize_schema(self, schema_path: Optional[str] = None) -> None:
        """Create schemas, tables and realtime triggers from `database/schema.sql`."""
        path = Path(schema_path or Path(__file__).with_name("schema.sql")).resolve()
        if not path.exists():
            raise DatabaseError(f"Schema file not found: {path}")

        sql_text = path.read_text(encoding="utf-8")
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                await conn.execute(sql_text)
        logger.info("Schema applied from %s", path)
