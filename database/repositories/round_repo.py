"""CRUD operations for tournaments.rounds."""

import asyncpg
from typing import List, Optional
from uuid import UUID

from models import Round
from database.converters import holes_to_json, round_from_row
from database.exceptions import IntegrityError, NotFoundError, RoundLockedError


class RoundRepositoryDB:
    """Async CRUD for rounds. Per-hole results are stored in play order as JSONB."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def get_round(self, round_id: str) -> Optional[Round]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM tournaments.rounds WHERE id = $1", UUID(round_id)
            )
            return round_from_row(row) if row else None

    async def get_rounds_by_tournament(self, tournament_id: str) -> List[Round]:
        """All rounds for players registered to a tournament."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT r.* FROM tournaments.rounds r
                   JOIN tournaments.players p ON p.id = r.player_id
                   WHERE p.tournament_id = $1
                   ORDER BY r.day NULLS LAST, r.created_at""",
                UUID(tournament_id),
            )
            return [round_from_row(r) for r in rows]

    # ================================================================
    # Create
    # ================================================================

    async def create_round(self, round_: Round) -> Round:
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO tournaments.rounds
                           (player_id, group_id, course_id, day, holes,
                            total_gross, total_points, handicap_used)
                       VALUES ($1, $2, $3, $4, $5::jsonb, $6, $7, $8) RETURNING *""",
                    UUID(round_.player_id),
                    UUID(round_.group_id) if round_.group_id else None,
                    UUID(round_.course_id) if round_.course_id else None,
                    round_.day,
                    holes_to_json(round_.holes),
                    round_.calculate_total_gross(),
                    round_.calculate_total_points(),
                    round_.handicap_used,
                )
                return round_from_row(row)
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(f"Player {round_.player_id} or its course does not exist") from e

    # ================================================================
    # Update
    # ================================================================

    async def save_holes(self, round_: Round) -> Round:
        """Persist a round's hole list and totals.

        Rounds already marked complete are left untouched by the WHERE clause
        and raise RoundLockedError; an unknown id raises NotFoundError.
        """
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """UPDATE tournaments.rounds
                   SET holes = $2::jsonb, total_gross = $3, total_points = $4,
                       updated_at = NOW()
                   WHERE id = $1 AND completed = FALSE
                   RETURNING *""",
                UUID(round_.id),
                holes_to_json(round_.holes),
                round_.calculate_total_gross(),
                round_.calculate_total_points(),
            )
            if row is None:
                completed = await conn.fetchval(
                    "SELECT completed FROM tournaments.rounds WHERE id = $1", UUID(round_.id)
                )
                if completed is None:
                    raise NotFoundError(f"Round {round_.id} not found")
                raise RoundLockedError(f"Round {round_.id} is complete and can no longer be scored")
            return round_from_row(row)

    async def mark_complete(self, round_id: str, submitted: bool = True) -> None:
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                """UPDATE tournaments.rounds
                   SET completed = TRUE, submitted = $2, updated_at = NOW()
                   WHERE id = $1""",
                UUID(round_id), submitted,
            )
            if result == "UPDATE 0":
                raise NotFoundError(f"Round {round_id} not found")
