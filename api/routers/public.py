"""Unauthenticated configuration endpoints. Only non-secret values are exposed."""

from fastapi import APIRouter, Depends

from config.settings import Settings
from api.dependencies import get_settings
from api.schemas import PublicConfigResponse, VapidKeyResponse
from api.routers.push import vapid_key

router = APIRouter()


@router.get("/config", response_model=PublicConfigResponse)
async def public_config(settings: Settings = Depends(get_settings)):
    return PublicConfigResponse(
        backend_url=settings.public_backend_url,
        backend_anon_key=settings.public_backend_anon_key,
    )


# Older clients fetch the key from here.
router.add_api_route("/vapid-key", vapid_key, methods=["GET"], response_model=VapidKeyResponse)
