"""Tournament administration endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from database.db_manager import DatabaseManager
from database.exceptions import DuplicateError, IntegrityError, NotFoundError
from api.dependencies import get_db
from api.schemas import (
    CreateCourseRequest,
    CreatePlayerRequest,
    CreateTournamentRequest,
    SuccessResponse,
    UpdateBlurRequest,
)
from models import Course, Hole, Player, ScoringType, Tournament

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/create", response_model=Tournament)
async def create_tournament(req: CreateTournamentRequest, db: DatabaseManager = Depends(get_db)):
    tournament = Tournament(
        name=req.name,
        code=req.code,
        password=req.password,
        admin_password=req.admin_password,
        scoring_type=req.scoring_type or ScoringType.STABLEFORD,
        number_of_days=req.number_of_days or 2,
        has_play_around_day=req.has_play_around_day,
        has_calcutta=req.has_calcutta,
        has_pick3=req.has_pick3,
    )
    try:
        created = await db.tournaments.create_tournament(tournament)
    except DuplicateError as e:
        raise HTTPException(409, str(e))
    except Exception as e:
        logger.exception("Error creating tournament")
        raise HTTPException(500, str(e) or "Unknown error")

    logger.info("Tournament created: %s (%s)", created.name, created.code)
    return created


@router.post("/update-blur", response_model=SuccessResponse)
async def update_blur(req: UpdateBlurRequest, db: DatabaseManager = Depends(get_db)):
    """Toggle hiding of the top five places on the leaderboard."""
    if not req.tournament_id:
        raise HTTPException(400, "Tournament ID is required")
    try:
        await db.tournaments.set_blur_top_5(req.tournament_id, req.blur_top_5)
    except NotFoundError:
        raise HTTPException(404, "Tournament not found")
    logger.info("blur_top_5 set to %s for tournament %s", req.blur_top_5, req.tournament_id)
    return SuccessResponse()


@router.get("/by-code/{code}", response_model=Tournament)
async def get_tournament_by_code(code: str, db: DatabaseManager = Depends(get_db)):
    tournament = await db.tournaments.get_tournament_by_code(code)
    if not tournament:
        raise HTTPException(404, "Tournament not found")
    return tournament


@router.get("/{tournament_id}", response_model=Tournament)
async def get_tournament(tournament_id: str, db: DatabaseManager = Depends(get_db)):
    tournament = await db.tournaments.get_tournament(tournament_id)
    if not tournament:
        raise HTTPException(404, "Tournament not found")
    return tournament


# ================================================================
# Players
# ================================================================

@router.get("/{tournament_id}/players", response_model=List[Player])
async def get_players(tournament_id: str, db: DatabaseManager = Depends(get_db)):
    return await db.players.get_players_by_tournament(tournament_id)


@router.post("/{tournament_id}/players", response_model=Player, status_code=201)
async def create_player(
    tournament_id: str,
    req: CreatePlayerRequest,
    db: DatabaseManager = Depends(get_db),
):
    player = Player(
        tournament_id=tournament_id,
        name=req.name,
        handicap=req.handicap,
        is_spectator=req.is_spectator,
        is_admin=req.is_admin,
        tee_preference=req.tee_preference,
    )
    try:
        return await db.players.create_player(player)
    except IntegrityError:
        raise HTTPException(404, "Tournament not found")


# ================================================================
# Courses
# ================================================================

@router.get("/{tournament_id}/courses", response_model=List[Course])
async def get_courses(tournament_id: str, db: DatabaseManager = Depends(get_db)):
    return await db.courses.get_courses_by_tournament(tournament_id)


@router.post("/{tournament_id}/courses", response_model=Course, status_code=201)
async def create_course(
    tournament_id: str,
    req: CreateCourseRequest,
    db: DatabaseManager = Depends(get_db),
):
    """Add a course with its per-hole par and stroke index."""
    numbers = [h.number for h in req.holes]
    if len(numbers) != len(set(numbers)):
        raise HTTPException(400, "Hole numbers must be unique")
    course = Course(
        tournament_id=tournament_id,
        name=req.name,
        holes=[Hole(number=h.number, par=h.par, stroke_index=h.stroke_index) for h in req.holes],
    )
    try:
        return await db.courses.create_course(course)
    except IntegrityError:
        raise HTTPException(404, "Tournament not found")
