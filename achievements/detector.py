"""Achievement detection for newly scored holes.

Pure functions only: no I/O, no clock, so results are deterministic.
"""

from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Sequence

from pydantic import Field

from models import Course, HoleScore, Round
from models.base import BaseGolfModel


class AchievementKind(str, Enum):
    """Noteworthy single-hole outcomes."""
    HOLE_IN_ONE = "hole-in-one"
    ALBATROSS = "albatross"  # 3 under par
    EAGLE = "eagle"          # 2 under par
    BIRDIE = "birdie"        # 1 under par


class AchievementDefinition(NamedTuple):
    title: str
    description: str
    icon: str


ACHIEVEMENTS: Dict[AchievementKind, AchievementDefinition] = {
    AchievementKind.HOLE_IN_ONE: AchievementDefinition(
        "Hole in One!", "Scored a hole in one", "🎯"
    ),
    AchievementKind.ALBATROSS: AchievementDefinition(
        "Albatross", "Scored an albatross (3 under par)", "🦢"
    ),
    AchievementKind.EAGLE: AchievementDefinition(
        "Eagle Eye", "Scored an eagle (2 under par)", "🦅"
    ),
    AchievementKind.BIRDIE: AchievementDefinition(
        "Birdie Hunter", "Scored a birdie (1 under par)", "🐦"
    ),
}

# HoleScore.get_score_type names that count as achievements.
_SCORE_TYPES = {
    "albatross": AchievementKind.ALBATROSS,
    "eagle": AchievementKind.EAGLE,
    "birdie": AchievementKind.BIRDIE,
}


class HoleResult(BaseGolfModel):
    """Strokes on one hole, annotated with the course par when it is known."""
    round_id: Optional[str] = None
    hole_number: int = Field(..., ge=1, le=18)
    strokes: int = Field(..., ge=1, le=20)
    par: Optional[int] = Field(None, ge=3, le=6)


class Achievement(BaseGolfModel):
    """A detected scoring event on a single hole."""
    round_id: Optional[str] = None
    kind: AchievementKind
    hole_number: int
    strokes: int
    par: Optional[int] = None

    @property
    def definition(self) -> AchievementDefinition:
        return ACHIEVEMENTS[self.kind]

    @property
    def title(self) -> str:
        return self.definition.title

    @property
    def source_key(self) -> Optional[str]:
        """Identifies this achievement on the feed: one post per round, hole and kind."""
        if self.round_id is None:
            return None
        return f"achievement:{self.round_id}:{self.hole_number}:{self.kind.value}"

    def caption(self, player_name: str) -> str:
        """Feed text for this achievement."""
        d = self.definition
        return (
            f'{player_name} just earned "{d.title}" on hole {self.hole_number}! '
            f"{d.icon} {d.description}"
        )


def classify_hole(result: HoleResult) -> Optional[AchievementKind]:
    """Classify one hole, or None when nothing noteworthy happened.

    An ace is always reported as a hole-in-one and never also as an
    eagle or albatross. Holes without a known par are not classified.
    """
    if result.strokes == 1:
        return AchievementKind.HOLE_IN_ONE
    score_type = HoleScore(
        hole_number=result.hole_number, strokes=result.strokes
    ).get_score_type(result.par)
    return _SCORE_TYPES.get(score_type)


def detect_achievements(
    current: Sequence[HoleResult],
    previous: Sequence[HoleResult] = (),
) -> List[Achievement]:
    """Achievements earned on the newest hole(s).

    `previous` holds the holes already played in the round. It is context
    only: those holes are never re-evaluated, and the per-hole rule does not
    depend on them.
    """
    achievements = []
    for result in current:
        kind = classify_hole(result)
        if kind is None:
            continue
        achievements.append(Achievement(
            kind=kind,
            round_id=result.round_id,
            hole_number=result.hole_number,
            strokes=result.strokes,
            par=result.par,
        ))
    return achievements


def hole_results_for_round(round_: Round, course: Optional[Course]) -> List[HoleResult]:
    """Annotate a round's scored holes with par, in play order.

    Holes with no course definition keep `par=None` rather than a guessed
    default, so they are skipped by the par-relative rule.
    """
    results = []
    for score in round_.holes:
        if score.strokes is None:
            continue
        results.append(HoleResult(
            round_id=round_.id,
            hole_number=score.hole_number,
            strokes=score.strokes,
            par=course.get_hole_par(score.hole_number) if course else None,
        ))
    return results
