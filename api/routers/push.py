"""Web-push registration and delivery endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from config.context import AppContext
from config.settings import Settings
from api.dependencies import get_context, get_settings
from api.schemas import (
    PushSendRequest,
    SubscribeRequest,
    SuccessResponse,
    UnsubscribeRequest,
    VapidKeyResponse,
)
from models import PushSubscription
from notifications.push import PushResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/subscribe", response_model=SuccessResponse)
async def subscribe(req: SubscribeRequest, ctx: AppContext = Depends(get_context)):
    """Register a device. Re-registering an endpoint updates it in place."""
    try:
        sub = PushSubscription.from_browser(
            req.subscription, user_id=req.user_id, tournament_id=req.tournament_id
        )
    except ValidationError:
        raise HTTPException(400, "Subscription is missing its endpoint")

    try:
        await ctx.db.push_subscriptions.upsert(sub)
    except Exception:
        logger.exception("Error storing push subscription")
        raise HTTPException(500, "Failed to store subscription")

    logger.info("Push subscription stored for user %s", req.user_id)
    return SuccessResponse()


@router.delete("/subscribe", response_model=SuccessResponse)
async def unsubscribe(req: UnsubscribeRequest, ctx: AppContext = Depends(get_context)):
    endpoint = req.subscription.get("endpoint")
    if not endpoint:
        raise HTTPException(400, "Subscription is missing its endpoint")

    try:
        await ctx.db.push_subscriptions.delete_by_endpoint(endpoint)
    except Exception:
        logger.exception("Error deleting push subscription")
        raise HTTPException(500, "Failed to delete subscription")
    return SuccessResponse()


@router.post("/send", response_model=PushResult)
async def send(req: PushSendRequest, ctx: AppContext = Depends(get_context)):
    """Push to a tournament's devices. Unconfigured keys are reported, not failed."""
    try:
        return await ctx.push.send(
            req.tournament_id,
            req.title,
            req.message,
            user_id=req.user_id,
            exclude_user_id=req.exclude_user_id,
        )
    except Exception:
        logger.exception("Error fetching push subscriptions")
        raise HTTPException(500, "Failed to send notifications")


@router.get("/vapid-key", response_model=VapidKeyResponse, response_model_by_alias=True)
async def vapid_key(settings: Settings = Depends(get_settings)):
    if not settings.vapid_public_key:
        raise HTTPException(500, "VAPID key not configured")
    return VapidKeyResponse(public_key=settings.vapid_public_key)
