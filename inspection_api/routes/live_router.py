import asyncio
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from inspection_api.core.logger import get_logger
from inspection_api.core.session import SessionContext
from inspection_api.services.auth_service import resolve_session
from inspection_api.services.live_updates import ERROR_EVENT, QUICK_CHECK_EVENT, live_updates

live_router = APIRouter(tags=["Live Updates"])
logger = get_logger(__name__)


async def forward_updates(websocket: WebSocket, queue: asyncio.Queue) -> None:
    for message in reversed(await live_updates.snapshot()):
        await websocket.send_json(message)
    while True:
        await websocket.send_json(await queue.get())


async def wait_for_disconnect(websocket: WebSocket) -> None:
    # Clients only listen; anything they send is dropped
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@live_router.websocket("/ws/quick-checks")
async def quick_check_updates(websocket: WebSocket):
    # Browsers cannot set headers on websockets, so the token travels in the query string
    session = await resolve_session(SessionContext(websocket.query_params.get("token")))
    if not session.is_authenticated:
        await websocket.close(code=4401)
        return

    await websocket.accept()
    queue: asyncio.Queue = asyncio.Queue()
    unsubscribe_updates = live_updates.on(QUICK_CHECK_EVENT, queue.put_nowait)
    unsubscribe_errors = live_updates.on(ERROR_EVENT, queue.put_nowait)
    unsubscribe_status = live_updates.on_status_change(
        lambda status: queue.put_nowait({"type": "status", "data": status})
    )
    logger.info(f"Live update subscriber connected: {session.user_id}")

    sender = asyncio.create_task(forward_updates(websocket, queue))
    receiver = asyncio.create_task(wait_for_disconnect(websocket))
    try:
        done, _ = await asyncio.wait({sender, receiver}, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            error = task.exception()
            if error is not None and not isinstance(error, WebSocketDisconnect):
                raise error
        logger.info(f"Live update subscriber disconnected: {session.user_id}")
    finally:
        for task in (sender, receiver):
            task.cancel()
        await asyncio.gather(sender, receiver, return_exceptions=True)
        unsubscribe_updates()
        unsubscribe_errors()
        unsubscribe_status()
