"""Web-push device registrations (social.push_subscriptions).

A subscription's endpoint is its identity: registering the same endpoint
again updates the row instead of adding one.
"""

import json
import asyncpg
from typing import List, Optional
from uuid import UUID

from models import PushSubscription
from database.converters import push_subscription_from_row


class PushSubscriptionRepositoryDB:

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def upsert(self, sub: PushSubscription) -> PushSubscription:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """INSERT INTO social.push_subscriptions
                       (user_id, tournament_id, endpoint, subscription, updated_at)
                   VALUES ($1, $2, $3, $4::jsonb, NOW())
                   ON CONFLICT (endpoint) DO UPDATE
                   SET user_id = EXCLUDED.user_id,
                       tournament_id = EXCLUDED.tournament_id,
                       subscription = EXCLUDED.subscription,
                       updated_at = NOW()
                   RETURNING *""",
                UUID(sub.user_id) if sub.user_id else None,
                UUID(sub.tournament_id) if sub.tournament_id else None,
                sub.endpoint,
                json.dumps(sub.subscription),
            )
            return push_subscription_from_row(row)

    async def find_for_tournament(
        self,
        tournament_id: str,
        *,
        user_id: Optional[str] = None,
        exclude_user_id: Optional[str] = None,
    ) -> List[PushSubscription]:
        """Subscriptions for a tournament.

        `user_id` narrows to one recipient and takes precedence over
        `exclude_user_id`, which drops one recipient.
        """
        query = "SELECT * FROM social.push_subscriptions WHERE tournament_id = $1"
        args: list = [UUID(tournament_id)]
        if user_id:
            query += " AND user_id = $2"
            args.append(UUID(user_id))
        elif exclude_user_id:
            query += " AND user_id IS DISTINCT FROM $2"
            args.append(UUID(exclude_user_id))

        async with self._pool.acquire() as conn:
            rows = await conn.fetch(query, *args)
            return [push_subscription_from_row(r) for r in rows]

    async def delete(self, subscription_id: str) -> bool:
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM social.push_subscriptions WHERE id = $1", UUID(subscription_id)
            )
            return result == "DELETE 1"

    async def delete_by_endpoint(self, endpoint: str) -> bool:
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM social.push_subscriptions WHERE endpoint = $1", endpoint
            )
            return result == "DELETE 1"
