from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class HoleScore(BaseGolfModel):
    """A player's result on a single hole."""
    hole_number: int = Field(..., ge=1, le=18)
    strokes: Optional[int] = Field(None, ge=1, le=20)
    points: int = Field(0, ge=0)
    net_score: Optional[int] = None
    penalty: int = Field(0, ge=0, le=10)

    def to_par(self, par: Optional[int]) -> Optional[int]:
        """Calculate score relative to par (+2, -1, etc.)."""
        if self.strokes is None or par is None:
            return None
        return self.strokes - par

    def get_score_type(self, par: Optional[int]) -> Optional[str]:
        """Get the name for this score (eagle, birdie, par, bogey, etc.)."""
        relative = self.to_par(par)
        if relative is None:
            return None

        score_names = {
            -2: "eagle",
            -1: "birdie",
            0: "par",
            1: "bogey",
            2: "double bogey",
            3: "triple bogey",
        }
        if relative <= -3:
            return "albatross"
        if relative >= 4:
            return "other"
        return score_names[relative]
