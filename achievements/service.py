"""Score submission and batch generation of achievement posts.

Both paths share one pipeline per hole: detect, publish a feed post for
each achievement, then fan out a notification to the other players.
One failed post or notification never stops the rest of the batch.
"""

import logging
from typing import Dict, List, Optional

from pydantic import Field

from models import Course, NotificationType, Player, Round
from models.base import BaseGolfModel
from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError, RoundLockedError
from achievements.detector import (
    Achievement,
    AchievementKind,
    HoleResult,
    classify_hole,
    detect_achievements,
    hole_results_for_round,
)
from achievements.publisher import AchievementPublisher
from notifications.fanout import FanoutEvent, NotificationFanout

logger = logging.getLogger(__name__)

_NOTIFICATION_TYPES = {
    AchievementKind.HOLE_IN_ONE: NotificationType.HOLE_IN_ONE,
    AchievementKind.EAGLE: NotificationType.EAGLE,
    AchievementKind.BIRDIE: NotificationType.BIRDIE,
}


class AchievementReport(BaseGolfModel):
    """Counters for one detection run."""
    rounds_scanned: int = 0
    holes_scanned: int = 0
    detected: int = 0
    posted: int = 0
    skipped: int = 0    # already on the feed
    failed: int = 0     # post write failed
    notifications_failed: int = 0
    achievements: List[Achievement] = Field(default_factory=list)


class AchievementService:

    def __init__(
        self,
        db: DatabaseManager,
        publisher: AchievementPublisher,
        fanout: NotificationFanout,
    ):
        self._db = db
        self._publisher = publisher
        self._fanout = fanout

    # ================================================================
    # Live scoring
    # ================================================================

    async def record_hole(
        self, round_id: str, hole_number: int, strokes: int, points: int = 0
    ) -> AchievementReport:
        """Store a hole score, then announce anything it earned.

        Raises NotFoundError for an unknown round or player and
        RoundLockedError if the round is already complete.
        """
        round_ = await self._db.rounds.get_round(round_id)
        if round_ is None:
            raise NotFoundError(f"Round {round_id} not found")
        if round_.completed:
            raise RoundLockedError(f"Round {round_id} is complete and can no longer be scored")

        previous = round_.get_hole_score(hole_number)
        previous_strokes = previous.strokes if previous else None
        round_.set_hole_score(hole_number, strokes, points)
        round_ = await self._db.rounds.save_holes(round_)

        player = await self._db.players.get_player(round_.player_id)
        if player is None:
            raise NotFoundError(f"Player {round_.player_id} not found")
        course = await self._course_for(round_, player.tournament_id)

        results = hole_results_for_round(round_, course)
        index = next(i for i, r in enumerate(results) if r.hole_number == hole_number)

        report = AchievementReport(rounds_scanned=1, holes_scanned=1)
        if previous_strokes is not None and _same_outcome(results[index], previous_strokes):
            logger.info(
                "Hole %d of round %s rescored with the same outcome", hole_number, round_id
            )
            return report
        found = detect_achievements(results[index:index + 1], results[:index])
        await self._announce(found, player, report, skip_existing=True)
        return report

    # ================================================================
    # Batch generation
    # ================================================================

    async def generate_for_tournament(self, tournament_id: str) -> AchievementReport:
        """Scan every round hole by hole and post achievements not yet on the feed."""
        players: Dict[str, Player] = {
            p.id: p for p in await self._db.players.get_players_by_tournament(tournament_id)
        }
        courses = await self._db.courses.get_courses_by_tournament(tournament_id)
        rounds = await self._db.rounds.get_rounds_by_tournament(tournament_id)

        report = AchievementReport()
        for round_ in rounds:
            player = players.get(round_.player_id)
            if player is None:
                logger.info("Skipping round %s: player not in tournament", round_.id)
                continue
            if not round_.holes:
                continue
            course = _pick_course(round_, courses)
            report.rounds_scanned += 1

            results = hole_results_for_round(round_, course)
            for i, result in enumerate(results):
                report.holes_scanned += 1
                found = detect_achievements([result], results[:i])
                await self._announce(found, player, report, skip_existing=True)

        logger.info(
            "Achievement generation for %s: %d detected, %d posted, %d skipped, %d failed",
            tournament_id, report.detected, report.posted, report.skipped, report.failed,
        )
        return report

    # ================================================================
    # Private helpers
    # ================================================================

    async def _course_for(self, round_: Round, tournament_id: str) -> Optional[Course]:
        if round_.course_id:
            course = await self._db.courses.get_course(round_.course_id)
            if course is not None:
                return course
        return _pick_course(round_, await self._db.courses.get_courses_by_tournament(tournament_id))

    async def _announce(
        self,
        achievements: List[Achievement],
        player: Player,
        report: AchievementReport,
        skip_existing: bool = False,
    ) -> None:
        for achievement in achievements:
            report.detected += 1
            report.achievements = report.achievements + [achievement]

            if skip_existing:
                try:
                    exists = await self._publisher.already_published(
                        achievement, player.tournament_id
                    )
                except Exception:
                    logger.exception("Duplicate check failed for %s", player.name)
                    exists = False
                if exists:
                    report.skipped += 1
                    continue

            post = await self._publisher.publish(achievement, player.name, player.tournament_id)
            if post is None:
                report.failed += 1
                continue
            report.posted += 1

            fanout = await self._fanout.broadcast(FanoutEvent(
                sender_id=player.id,
                tournament_id=player.tournament_id,
                type=_NOTIFICATION_TYPES.get(achievement.kind, NotificationType.ACHIEVEMENT),
                title=achievement.title,
                message=post.content,
                push_title=f"{achievement.definition.icon} {achievement.title}",
            ))
            report.notifications_failed += fanout.failed

            own = await self._fanout.notify_one(player.id, FanoutEvent(
                sender_id=player.id,
                tournament_id=player.tournament_id,
                type=NotificationType.ACHIEVEMENT,
                title=achievement.title,
                message=f'You earned "{achievement.title}" on hole {achievement.hole_number}!',
            ))
            report.notifications_failed += own.failed


def _same_outcome(result: HoleResult, previous_strokes: int) -> bool:
    """True when the earlier score for this hole classified the same way."""
    before = result.model_copy(update={"strokes": previous_strokes})
    return classify_hole(before) == classify_hole(result)


def _pick_course(round_: Round, courses: List[Course]) -> Optional[Course]:
    """The round's own course, else the tournament's first course."""
    for course in courses:
        if course.id == round_.course_id:
            return course
    return courses[0] if courses else None
