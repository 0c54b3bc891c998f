"""CRUD operations for the tournaments.players table."""

import asyncpg
from typing import List, Optional
from uuid import UUID

from models import Player
from database.converters import player_from_row
from database.exceptions import IntegrityError, NotFoundError


class PlayerRepositoryDB:
    """Async CRUD for players."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_player(self, player_id: str) -> Optional[Player]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM tournaments.players WHERE id = $1", UUID(player_id)
            )
            return player_from_row(row) if row else None

    async def get_players_by_tournament(self, tournament_id: str) -> List[Player]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM tournaments.players
                   WHERE tournament_id = $1 ORDER BY name""",
                UUID(tournament_id),
            )
            return [player_from_row(r) for r in rows]

    async def create_player(self, player: Player) -> Player:
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO tournaments.players
                           (tournament_id, name, handicap, profile_picture,
                            is_spectator, is_admin, tee_preference)
                       VALUES ($1, $2, $3, $4, $5, $6, $7) RETURNING *""",
                    UUID(player.tournament_id), player.name, player.handicap,
                    player.profile_picture, player.is_spectator, player.is_admin,
                    player.tee_preference,
                )
                return player_from_row(row)
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(f"Tournament {player.tournament_id} does not exist") from e

    async def update_profile_picture(self, player_id: str, url: str) -> None:
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "UPDATE tournaments.players SET profile_picture = $2 WHERE id = $1",
                UUID(player_id), url,
            )
            if result == "UPDATE 0":
                raise NotFoundError(f"Player {player_id} not found")
