"""Live views pushed over WebSocket.

The socket is refreshed from two independent sources: realtime change
notices and a polling timer. Both feed one coalescing refresher, so a
client may receive the same state twice but never interleaved sends.
"""

import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from config.context import AppContext
from api.dependencies import get_context
from realtime.refresh import CoalescingRefresher

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/tournaments/{tournament_id}/messages")
async def live_messages(
    websocket: WebSocket,
    tournament_id: str,
    ctx: AppContext = Depends(get_context),
):
    await websocket.accept()

    async def refresh() -> None:
        messages = await ctx.db.messages.get_messages_by_tournament(tournament_id)
        await websocket.send_json([m.model_dump(mode="json") for m in messages])

    refresher = CoalescingRefresher(refresh, interval=ctx.settings.chat_poll_interval)
    subscription = None
    if ctx.realtime is not None:
        try:
            subscription = await ctx.realtime.subscribe(
                "messages", refresher.trigger, column="tournament_id", value=tournament_id
            )
        except Exception:
            logger.warning("Realtime unavailable, falling back to polling", exc_info=True)

    refresher.start()
    try:
        await refresher.refresh_now()
        while True:
            # Clients only send keep-alives; any text triggers a refresh.
            await websocket.receive_text()
            refresher.trigger()
    except WebSocketDisconnect:
        pass
    finally:
        await refresher.stop()
        if subscription is not None:
            await ctx.realtime.unsubscribe(subscription)
