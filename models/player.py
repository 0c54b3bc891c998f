from datetime import datetime
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class Player(BaseGolfModel):
    """A player (or spectator) registered to one tournament."""
    id: Optional[str] = None
    tournament_id: str
    name: str
    handicap: float = Field(0, ge=-10, le=54)
    profile_picture: Optional[str] = None
    is_spectator: bool = False
    is_admin: bool = False
    tee_preference: Optional[str] = None
    created_at: Optional[datetime] = None
