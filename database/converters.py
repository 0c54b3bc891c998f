"""Conversion between asyncpg database rows and Pydantic domain models.

Centralizes all mapping logic between the DB schema and the models.
JSONB columns may arrive either decoded or as text depending on whether a
type codec is registered on the connection, so both are accepted.
"""

import json
from typing import Any, List, Optional
from uuid import UUID

from models import (
    Course,
    Hole,
    HoleScore,
    Message,
    Notification,
    Player,
    Post,
    PushSubscription,
    Round,
    Tournament,
)


def _load_json(value: Any, default: Any) -> Any:
    if value is None:
        return default
    if isinstance(value, (str, bytes)):
        return json.loads(value)
    return value


def _str_id(value) -> Optional[str]:
    return str(value) if value is not None else None


def _uuid(value: Optional[str]) -> Optional[UUID]:
    return UUID(value) if value else None


# ================================================================
# Row -> Model (reads)
# ================================================================

def tournament_from_row(row) -> Tournament:
    """tournaments.tournaments row -> Tournament model."""
    return Tournament(
        id=str(row["id"]),
        name=row["name"],
        code=row["code"],
        password=row["password"],
        admin_password=row["admin_password"],
        scoring_type=row["scoring_type"],
        number_of_days=row["number_of_days"],
        has_play_around_day=row["has_play_around_day"],
        has_calcutta=row["has_calcutta"],
        has_pick3=row["has_pick3"],
        blur_top_5=row["blur_top_5"],
        calcutta_close_time=row["calcutta_close_time"],
        allow_spectator_chat=row["allow_spectator_chat"],
        allow_spectator_feed=row["allow_spectator_feed"],
        allow_spectator_betting=row["allow_spectator_betting"],
        infinite_betting=row["infinite_betting"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def player_from_row(row) -> Player:
    """tournaments.players row -> Player model."""
    return Player(
        id=str(row["id"]),
        tournament_id=str(row["tournament_id"]),
        name=row["name"],
        handicap=float(row["handicap"]) if row["handicap"] is not None else 0,
        profile_picture=row["profile_picture"],
        is_spectator=row["is_spectator"],
        is_admin=row["is_admin"],
        tee_preference=row["tee_preference"],
        created_at=row["created_at"],
    )


def hole_from_json(data: dict) -> Hole:
    return Hole(
        number=data["hole_number"],
        par=data.get("par"),
        stroke_index=data.get("stroke_index"),
    )


def course_from_row(row) -> Course:
    """tournaments.courses row (holes as JSONB) -> Course model."""
    holes = [hole_from_json(h) for h in _load_json(row["holes"], [])]
    return Course(
        id=str(row["id"]),
        tournament_id=_str_id(row["tournament_id"]),
        name=row["name"],
        holes=sorted(holes, key=lambda h: h.number),
    )


def hole_score_from_json(data: dict) -> HoleScore:
    return HoleScore(
        hole_number=data["hole_number"],
        strokes=data.get("strokes"),
        points=data.get("points") or 0,
        net_score=data.get("net_score"),
        penalty=data.get("penalty") or 0,
    )


def round_from_row(row) -> Round:
    """tournaments.rounds row -> Round model. Hole order is play order and is preserved."""
    return Round(
        id=str(row["id"]),
        player_id=_str_id(row["player_id"]),
        group_id=_str_id(row["group_id"]),
        course_id=_str_id(row["course_id"]),
        day=row["day"],
        holes=[hole_score_from_json(h) for h in _load_json(row["holes"], [])],
        total_gross=row["total_gross"] or 0,
        total_points=row["total_points"] or 0,
        completed=row["completed"],
        submitted=row["submitted"],
        handicap_used=float(row["handicap_used"]) if row["handicap_used"] is not None else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def message_from_row(row) -> Message:
    """social.messages row -> Message model."""
    return Message(
        id=str(row["id"]),
        tournament_id=str(row["tournament_id"]),
        player_id=str(row["player_id"]),
        player_name=row["player_name"],
        message=row["message"],
        timestamp=row["timestamp"],
    )


def post_from_row(row) -> Post:
    """social.posts row -> Post model."""
    return Post(
        id=str(row["id"]),
        tournament_id=str(row["tournament_id"]),
        player_id=_str_id(row["player_id"]),
        player_name=row["player_name"],
        content=row["content"],
        media_url=row["media_url"],
        media_type=row["media_type"],
        liked_by=[str(p) for p in (row["liked_by"] or [])],
        source_key=row["source_key"],
        timestamp=row["timestamp"],
    )


def notification_from_row(row) -> Notification:
    """social.notifications row -> Notification model."""
    return Notification(
        id=str(row["id"]),
        player_id=str(row["player_id"]),
        tournament_id=str(row["tournament_id"]),
        type=row["type"],
        title=row["title"],
        message=row["message"],
        read=row["read"],
        timestamp=row["timestamp"],
    )


def push_subscription_from_row(row) -> PushSubscription:
    """social.push_subscriptions row -> PushSubscription model."""
    return PushSubscription(
        id=str(row["id"]),
        user_id=_str_id(row["user_id"]),
        tournament_id=_str_id(row["tournament_id"]),
        endpoint=row["endpoint"],
        subscription=_load_json(row["subscription"], {}),
        updated_at=row["updated_at"],
    )


# ================================================================
# Model -> Row (writes)
# ================================================================

def tournament_to_row(t: Tournament) -> dict:
    """Tournament -> dict for tournaments.tournaments INSERT."""
    return {
        "name": t.name,
        "code": t.code,
        "password": t.password,
        "admin_password": t.admin_password,
        "scoring_type": t.scoring_type.value,
        "number_of_days": t.number_of_days,
        "has_play_around_day": t.has_play_around_day,
        "has_calcutta": t.has_calcutta,
        "has_pick3": t.has_pick3,
        "allow_spectator_chat": t.allow_spectator_chat,
        "allow_spectator_feed": t.allow_spectator_feed,
        "allow_spectator_betting": t.allow_spectator_betting,
    }


def holes_to_json(holes: List[HoleScore]) -> str:
    """Round holes -> JSON text for the JSONB column, in play order."""
    return json.dumps([
        {
            "hole_number": hs.hole_number,
            "strokes": hs.strokes,
            "points": hs.points,
            "net_score": hs.net_score,
            "penalty": hs.penalty,
        }
        for hs in holes
    ])


def course_holes_to_json(holes: List[Hole]) -> str:
    return json.dumps([
        {"hole_number": h.number, "par": h.par, "stroke_index": h.stroke_index}
        for h in holes
    ])


def notification_to_row(n: Notification) -> tuple:
    """Notification -> tuple for social.notifications INSERT (for executemany)."""
    return (
        UUID(n.tournament_id), UUID(n.player_id),
        n.type.value, n.title, n.message, n.read,
    )


def post_to_row(p: Post) -> tuple:
    """Post -> tuple for social.posts INSERT."""
    return (
        UUID(p.tournament_id), _uuid(p.player_id), p.player_name, p.content,
        p.media_url, p.media_type.value if p.media_type else None, p.source_key,
    )
