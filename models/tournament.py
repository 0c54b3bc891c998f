from datetime import datetime
from enum import Enum
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class ScoringType(str, Enum):
    """How a tournament's leaderboard is scored."""
    STABLEFORD = "stableford"
    STROKES = "strokes"
    HANDICAP = "handicap"
    NET_SCORE = "net-score"


class Tournament(BaseGolfModel):
    """A scoring event with its own access code, passwords and format flags."""
    id: Optional[str] = None
    name: str
    code: str
    password: str
    admin_password: str
    scoring_type: ScoringType = ScoringType.STABLEFORD
    number_of_days: int = Field(2, ge=1, le=7)
    has_play_around_day: bool = False
    has_calcutta: bool = False
    has_pick3: bool = False
    blur_top_5: bool = False
    calcutta_close_time: Optional[datetime] = None
    allow_spectator_chat: bool = True
    allow_spectator_feed: bool = True
    allow_spectator_betting: bool = True
    infinite_betting: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
