"""In-app notification endpoints for the recipient's client."""

from fastapi import APIRouter, Depends, HTTPException
from typing import List

from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError
from api.dependencies import get_db
from api.schemas import SuccessResponse
from models import Notification

router = APIRouter()


@router.get("/player/{player_id}", response_model=List[Notification])
async def get_notifications(player_id: str, db: DatabaseManager = Depends(get_db)):
    return await db.notifications.get_notifications_by_player(player_id)


@router.post("/{notification_id}/read", response_model=SuccessResponse)
async def mark_read(notification_id: str, db: DatabaseManager = Depends(get_db)):
    try:
        await db.notifications.mark_read(notification_id)
    except NotFoundError:
        raise HTTPException(404, "Notification not found")
    return SuccessResponse()


@router.delete("/player/{player_id}")
async def clear_notifications(player_id: str, db: DatabaseManager = Depends(get_db)):
    removed = await db.notifications.clear_for_player(player_id)
    return {"success": True, "removed": removed}


@router.delete("/{notification_id}", status_code=204)
async def delete_notification(notification_id: str, db: DatabaseManager = Depends(get_db)):
    deleted = await db.notifications.delete_notification(notification_id)
    if not deleted:
        raise HTTPException(404, "Notification not found")
