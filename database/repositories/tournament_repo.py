"""CRUD operations for the tournaments.tournaments table."""

import asyncpg
from typing import List, Optional
from uuid import UUID

from models import Tournament
from database.converters import tournament_from_row, tournament_to_row
from database.exceptions import DuplicateError, NotFoundError


class TournamentRepositoryDB:
    """Async CRUD for tournaments."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def get_tournament(self, tournament_id: str) -> Optional[Tournament]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM tournaments.tournaments WHERE id = $1", UUID(tournament_id)
            )
            return tournament_from_row(row) if row else None

    async def get_tournament_by_code(self, code: str) -> Optional[Tournament]:
        """Look up by access code (case-insensitive)."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM tournaments.tournaments WHERE UPPER(code) = UPPER($1)", code
            )
            return tournament_from_row(row) if row else None

    # ================================================================
    # Create
    # ================================================================

    async def create_tournament(self, tournament: Tournament) -> Tournament:
        """Insert a tournament. Returns it with DB-generated id and timestamps."""
        data = tournament_to_row(tournament)
        columns = ", ".join(data)
        placeholders = ", ".join(f"${i+1}" for i in range(len(data)))
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""INSERT INTO tournaments.tournaments ({columns})
                        VALUES ({placeholders}) RETURNING *""",
                    *data.values(),
                )
                return tournament_from_row(row)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(f"Tournament code already in use: {tournament.code}") from e

    # ================================================================
    # Update
    # ================================================================

    async def set_blur_top_5(self, tournament_id: str, blur: bool) -> None:
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                """UPDATE tournaments.tournaments
                   SET blur_top_5 = $2, updated_at = NOW()
                   WHERE id = $1""",
                UUID(tournament_id), blur,
            )
            if result == "UPDATE 0":
                raise NotFoundError(f"Tournament {tournament_id} not found")
