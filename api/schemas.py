"""Request and response bodies for the HTTP API.

Clients speak camelCase JSON; fields are snake_case in Python.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional

from models import ScoringType


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ================================================================
# Push
# ================================================================

class SubscribeRequest(CamelModel):
    subscription: Dict[str, Any]
    user_id: Optional[str] = None
    tournament_id: Optional[str] = None


class UnsubscribeRequest(CamelModel):
    subscription: Dict[str, Any]


class PushSendRequest(CamelModel):
    tournament_id: str
    title: str
    message: str
    user_id: Optional[str] = None
    exclude_user_id: Optional[str] = None


class VapidKeyResponse(CamelModel):
    public_key: str


class PublicConfigResponse(CamelModel):
    backend_url: str
    backend_anon_key: str


# ================================================================
# Tournaments
# ================================================================

class CreateTournamentRequest(CamelModel):
    name: str = Field(..., min_length=1)
    password: str
    admin_password: str
    code: str = Field(..., min_length=1)
    scoring_type: Optional[ScoringType] = None
    number_of_days: Optional[int] = Field(None, ge=1, le=7)
    has_play_around_day: bool = False
    has_calcutta: bool = False
    has_pick3: bool = False


class UpdateBlurRequest(CamelModel):
    tournament_id: Optional[str] = None
    blur_top_5: bool = False


class CreatePlayerRequest(CamelModel):
    name: str = Field(..., min_length=1)
    handicap: float = 0
    is_spectator: bool = False
    is_admin: bool = False
    tee_preference: Optional[str] = None


class CourseHoleRequest(CamelModel):
    number: int = Field(..., ge=1, le=18)
    par: Optional[int] = Field(None, ge=3, le=6)
    stroke_index: Optional[int] = Field(None, ge=1, le=18)


class CreateCourseRequest(CamelModel):
    name: str = Field(..., min_length=1)
    holes: List[CourseHoleRequest] = Field(default_factory=list)


# ================================================================
# Social
# ================================================================

class SendMessageRequest(CamelModel):
    player_id: str
    player_name: str
    content: str


# ================================================================
# Scoring
# ================================================================

class CreateRoundRequest(CamelModel):
    player_id: str
    course_id: Optional[str] = None
    group_id: Optional[str] = None
    day: int = Field(1, ge=1)
    handicap_used: Optional[float] = None


class HoleScoreRequest(CamelModel):
    hole_number: int = Field(..., ge=1, le=18)
    strokes: int = Field(..., ge=1, le=20)
    points: int = Field(0, ge=0)


class GenerateAchievementsRequest(CamelModel):
    tournament_id: str


class SuccessResponse(BaseModel):
    success: bool = True
