from datetime import datetime
from enum import Enum
from pydantic import Field
from typing import List, Optional

from .base import BaseGolfModel

# Display name used for posts generated by the system rather than a player.
SYSTEM_AUTHOR = "Aussie Golf"


class MediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class Message(BaseGolfModel):
    """Chat entry scoped to a tournament. Append-only."""
    id: Optional[str] = None
    tournament_id: str
    player_id: str
    player_name: str
    message: str = Field(..., min_length=1, max_length=2000)
    timestamp: Optional[datetime] = None


class Post(BaseGolfModel):
    """Social feed entry. player_id is None for system posts such as achievements."""
    id: Optional[str] = None
    tournament_id: str
    player_id: Optional[str] = None
    player_name: str
    content: str
    media_url: Optional[str] = None
    media_type: Optional[MediaType] = None
    liked_by: List[str] = Field(default_factory=list)
    source_key: Optional[str] = None  # set on generated posts, see Achievement.source_key
    timestamp: Optional[datetime] = None

    @property
    def is_system_post(self) -> bool:
        return self.player_id is None
