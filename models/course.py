from pydantic import Field
from typing import List, Optional

from .base import BaseGolfModel
from .hole import Hole


class Course(BaseGolfModel):
    """Course played in a tournament, with its hole definitions."""
    id: Optional[str] = None
    tournament_id: Optional[str] = None
    name: Optional[str] = None
    holes: List[Hole] = Field(default_factory=list)

    def get_hole(self, number: int) -> Optional[Hole]:
        """Look up a hole by its number. Holes may be stored out of order or sparsely."""
        for hole in self.holes:
            if hole.number == number:
                return hole
        return None

    def get_hole_par(self, number: int) -> Optional[int]:
        hole = self.get_hole(number)
        return hole.par if hole else None
