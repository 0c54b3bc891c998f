"""CRUD operations for the tournaments.courses table."""

import asyncpg
from typing import List, Optional
from uuid import UUID

from models import Course
from database.converters import course_from_row, course_holes_to_json
from database.exceptions import IntegrityError


class CourseRepositoryDB:
    """Async CRUD for tournament courses. Hole definitions live in a JSONB column."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_course(self, course_id: str) -> Optional[Course]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM tournaments.courses WHERE id = $1", UUID(course_id)
            )
            return course_from_row(row) if row else None

    async def get_courses_by_tournament(self, tournament_id: str) -> List[Course]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM tournaments.courses
                   WHERE tournament_id = $1 ORDER BY created_at""",
                UUID(tournament_id),
            )
            return [course_from_row(r) for r in rows]

    async def create_course(self, course: Course) -> Course:
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO tournaments.courses (tournament_id, name, holes)
                       VALUES ($1, $2, $3::jsonb) RETURNING *""",
                    UUID(course.tournament_id), course.name,
                    course_holes_to_json(course.holes),
                )
                return course_from_row(row)
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(f"Tournament {course.tournament_id} does not exist") from e
