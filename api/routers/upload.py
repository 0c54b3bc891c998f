"""File upload endpoints. Failures are reported in the body and never retried."""

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from config.context import AppContext
from database.exceptions import NotFoundError
from api.dependencies import get_context

logger = logging.getLogger(__name__)

router = APIRouter()


def _failure(status: int, error: str) -> JSONResponse:
    return JSONResponse({"success": False, "error": error}, status_code=status)


@router.post("")
async def upload_file(
    file: Optional[UploadFile] = File(None),
    ctx: AppContext = Depends(get_context),
):
    """Store a feed attachment under its own name plus a random suffix."""
    if file is None or not file.filename:
        return _failure(400, "No file provided")
    try:
        url = await ctx.storage.put(file.filename, await file.read(), add_random_suffix=True)
    except Exception:
        logger.exception("Upload of %s failed", file.filename)
        return _failure(500, "Upload failed")
    return {"success": True, "url": url}


@router.post("/profile-picture")
async def upload_profile_picture(
    file: Optional[UploadFile] = File(None),
    player_id: Optional[str] = Form(None, alias="playerId"),
    ctx: AppContext = Depends(get_context),
):
    """Store a profile picture and, when a player is given, point their profile at it."""
    if file is None or not file.filename:
        return _failure(400, "No file provided")
    path = f"profile-pictures/{int(time.time() * 1000)}-{file.filename}"
    try:
        url = await ctx.storage.put(path, await file.read())
    except Exception:
        logger.exception("Profile picture upload failed")
        return _failure(500, "Failed to upload profile picture")

    if player_id:
        try:
            await ctx.db.players.update_profile_picture(player_id, url)
        except NotFoundError:
            return _failure(404, "Player not found")
    return {"success": True, "url": url}
