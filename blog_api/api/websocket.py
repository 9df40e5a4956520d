"""WebSocket endpoint streaming post change events."""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from blog_api.api.dependencies import get_notifier
from blog_api.services.notifier import PostNotifier

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/ws", tags=["websocket"])


@router.websocket("/posts")
async def websocket_posts(
    websocket: WebSocket,
    notifier: Annotated[PostNotifier, Depends(get_notifier)],
) -> None:
    """Forward every post event to the connected client.

    Delivery is best-effort: events published while a client is not
    connected are not replayed.
    """
    await websocket.accept()
    logger.info("WebSocket client connected to post events")

    async def handle_messages() -> None:
        """Receive events from Redis and forward to WebSocket."""
        async for message in notifier.listen():
            try:
                await websocket.send_json({"type": "posts", **message})
            except WebSocketDisconnect:
                break
            except Exception as e:
                logger.error(f"Error sending WebSocket message: {e}")
                break

    async def handle_ping() -> None:
        """Send periodic pings to keep connection alive."""
        while True:
            try:
                await asyncio.sleep(30)
                await websocket.send_json({"type": "ping"})
            except Exception:
                break

    async def handle_client() -> None:
        """Drain client messages (pong responses) until it goes away."""
        while True:
            try:
                await websocket.receive_json()
            except Exception:
                break

    try:
        tasks = [
            asyncio.create_task(handle_messages()),
            asyncio.create_task(handle_ping()),
            asyncio.create_task(handle_client()),
        ]
        # Stop everything once any side ends
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            if not task.cancelled() and task.exception() is not None:
                logger.error(f"Post event stream failed: {task.exception()!r}")
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
    except Exception as e:
        logger.error(f"WebSocket error: {e}", exc_info=True)
    finally:
        logger.info("WebSocket client disconnected from post events")
