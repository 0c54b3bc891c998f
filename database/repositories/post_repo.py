"""Social feed posts (social.posts)."""

import asyncpg
from typing import List
from uuid import UUID

from models import Post
from database.converters import post_from_row, post_to_row


class PostRepositoryDB:

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def create_post(self, post: Post) -> Post:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """INSERT INTO social.posts
                       (tournament_id, player_id, player_name, content,
                        media_url, media_type, source_key)
                   VALUES ($1, $2, $3, $4, $5, $6, $7) RETURNING *""",
                *post_to_row(post),
            )
            return post_from_row(row)

    async def get_posts_by_tournament(self, tournament_id: str) -> List[Post]:
        """Feed newest first."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM social.posts
                   WHERE tournament_id = $1 ORDER BY timestamp DESC""",
                UUID(tournament_id),
            )
            return [post_from_row(r) for r in rows]

    async def exists_with_source_key(self, tournament_id: str, source_key: str) -> bool:
        """True if a post generated from `source_key` is already on the tournament feed."""
        async with self._pool.acquire() as conn:
            found = await conn.fetchval(
                """SELECT EXISTS (
                       SELECT 1 FROM social.posts
                       WHERE tournament_id = $1 AND source_key = $2
                   )""",
                UUID(tournament_id), source_key,
            )
            return bool(found)
