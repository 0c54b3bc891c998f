"""Round scoring endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from config.context import AppContext
from database.exceptions import IntegrityError, NotFoundError, RoundLockedError
from api.dependencies import get_context
from api.schemas import (
    CreateRoundRequest,
    GenerateAchievementsRequest,
    HoleScoreRequest,
    SuccessResponse,
)
from achievements.service import AchievementReport
from models import Round

router = APIRouter()


@router.post("", response_model=Round, status_code=201)
async def create_round(req: CreateRoundRequest, ctx: AppContext = Depends(get_context)):
    """Open a scorecard for a player on one tournament day."""
    round_ = Round(
        player_id=req.player_id,
        course_id=req.course_id,
        group_id=req.group_id,
        day=req.day,
        handicap_used=req.handicap_used,
    )
    try:
        return await ctx.db.rounds.create_round(round_)
    except IntegrityError as e:
        raise HTTPException(404, str(e))


@router.get("/{round_id}", response_model=Round)
async def get_round(round_id: str, ctx: AppContext = Depends(get_context)):
    round_ = await ctx.db.rounds.get_round(round_id)
    if not round_:
        raise HTTPException(404, "Round not found")
    return round_


@router.post("/{round_id}/holes", response_model=AchievementReport)
async def submit_hole_score(
    round_id: str,
    req: HoleScoreRequest,
    ctx: AppContext = Depends(get_context),
):
    """Record a hole score and announce any achievement it earns."""
    try:
        return await ctx.achievements.record_hole(
            round_id, req.hole_number, req.strokes, req.points
        )
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except RoundLockedError as e:
        raise HTTPException(409, str(e))


@router.post("/{round_id}/complete", response_model=SuccessResponse)
async def complete_round(round_id: str, ctx: AppContext = Depends(get_context)):
    """Lock the scorecard. Completed rounds reject further scores."""
    try:
        await ctx.db.rounds.mark_complete(round_id)
    except NotFoundError:
        raise HTTPException(404, "Round not found")
    return SuccessResponse()


achievements_router = APIRouter()


@achievements_router.post("/generate", response_model=AchievementReport)
async def generate_achievements(
    req: GenerateAchievementsRequest,
    ctx: AppContext = Depends(get_context),
):
    """Backfill feed posts for every achievement in the tournament's rounds."""
    tournament = await ctx.db.tournaments.get_tournament(req.tournament_id)
    if not tournament:
        raise HTTPException(404, "Tournament not found")
    return await ctx.achievements.generate_for_tournament(tournament.id)
