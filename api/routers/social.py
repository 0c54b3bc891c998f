"""Tournament chat and feed endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ValidationError

from config.context import AppContext
from database.exceptions import IntegrityError
from api.dependencies import get_context
from api.schemas import SendMessageRequest
from models import Message, NotificationType, Post
from notifications.fanout import FanoutEvent, FanoutResult

logger = logging.getLogger(__name__)

router = APIRouter()

# Notification previews are cut to this many characters.
PREVIEW_LENGTH = 100


class SendMessageResponse(BaseModel):
    message: Message
    notifications: FanoutResult


@router.get("/{tournament_id}/messages", response_model=List[Message])
async def get_messages(tournament_id: str, ctx: AppContext = Depends(get_context)):
    return await ctx.db.messages.get_messages_by_tournament(tournament_id)


@router.post("/{tournament_id}/messages", response_model=SendMessageResponse, status_code=201)
async def send_message(
    tournament_id: str,
    req: SendMessageRequest,
    ctx: AppContext = Depends(get_context),
):
    """Store a chat message, then notify everyone else in the tournament.

    Notification and push failures are reported in the response but never
    fail the send.
    """
    content = req.content.strip()
    try:
        message = Message(
            tournament_id=tournament_id,
            player_id=req.player_id,
            player_name=req.player_name,
            message=content,
        )
    except ValidationError:
        raise HTTPException(400, "Message cannot be empty" if not content else "Message is too long")

    try:
        saved = await ctx.db.messages.create_message(message)
    except IntegrityError:
        raise HTTPException(404, "Tournament or player not found")

    preview = content[:PREVIEW_LENGTH]
    result = await ctx.fanout.broadcast(FanoutEvent(
        sender_id=req.player_id,
        tournament_id=tournament_id,
        type=NotificationType.CHAT,
        title=f"New message from {req.player_name}",
        message=preview,
        push_title=f"💬 {req.player_name}",
    ))
    return SendMessageResponse(message=saved, notifications=result)


@router.get("/{tournament_id}/posts", response_model=List[Post])
async def get_posts(tournament_id: str, ctx: AppContext = Depends(get_context)):
    """Feed for a tournament, newest first."""
    return await ctx.db.posts.get_posts_by_tournament(tournament_id)
