from datetime import datetime
from pydantic import Field
from typing import List, Optional

from .base import BaseGolfModel
from .hole_score import HoleScore


class Round(BaseGolfModel):
    """One player's scorecard for one tournament day."""
    id: Optional[str] = None
    player_id: Optional[str] = None
    group_id: Optional[str] = None
    course_id: Optional[str] = None
    day: Optional[int] = Field(None, ge=1)
    holes: List[HoleScore] = Field(default_factory=list)
    total_gross: int = 0
    total_points: int = 0
    completed: bool = False
    submitted: bool = False
    handicap_used: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def get_hole_score(self, hole_number: int) -> Optional[HoleScore]:
        for score in self.holes:
            if score.hole_number == hole_number:
                return score
        return None

    def calculate_total_gross(self) -> int:
        """Total strokes over the holes played, penalties included."""
        return sum((s.strokes or 0) + s.penalty for s in self.holes if s.strokes is not None)

    def calculate_total_points(self) -> int:
        return sum(s.points for s in self.holes)

    def set_hole_score(self, hole_number: int, strokes: int, points: int = 0) -> HoleScore:
        """Insert or replace the score for a hole. Returns the stored HoleScore.

        Holes keep the order they were played in, which is not hole-number
        order for groups starting on the back nine.
        """
        score = HoleScore(hole_number=hole_number, strokes=strokes, points=points)
        holes = list(self.holes)
        for i, existing in enumerate(holes):
            if existing.hole_number == hole_number:
                holes[i] = score
                break
        else:
            holes.append(score)
        self.holes = holes
        self.total_gross = self.calculate_total_gross()
        self.total_points = self.calculate_total_points()
        return score
