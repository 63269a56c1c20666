"""
Push quick-check changes to connected clients.

One listener per process follows the ``quick_checks`` change stream and
fans each change out to the callbacks registered for its event name.
"""
import asyncio
from contextlib import suppress
from typing import Any, Callable, Dict, List, Optional

from pymongo.errors import PyMongoError

from inspection_api.core import database
from inspection_api.core.config import settings
from inspection_api.core.database import to_record
from inspection_api.core.logger import get_logger

logger = get_logger(__name__)

QUICK_CHECKS = "quick_checks"
QUICK_CHECK_EVENT = "quick_check_update"
ERROR_EVENT = "error"

ACTIONS = {
    "insert": "created",
    "update": "updated",
    "replace": "updated",
    "delete": "deleted",
}

EventCallback = Callable[[Dict[str, Any]], None]
StatusCallback = Callable[[Dict[str, bool]], None]


def build_message(change: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    action = ACTIONS.get(change.get("operationType"))
    if action is None:
        return None

    doc_id = str(change["documentKey"]["_id"])
    if action == "deleted":
        data = {"id": doc_id}
    else:
        document = change.get("fullDocument")
        # an update can race a delete, leaving no document to look up
        if document is None:
            return None
        data = to_record(document)

    return {"type": QUICK_CHECK_EVENT, "action": action, "data": data}


class LiveUpdateService:
    def __init__(self, collection: str = QUICK_CHECKS):
        self.collection = collection
        self.status = {"connected": False, "authenticated": False, "reconnecting": False}
        self._callbacks: Dict[str, List[EventCallback]] = {}
        self._status_callbacks: List[StatusCallback] = []
        self._task: Optional[asyncio.Task] = None

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def start(self) -> None:
        if self._task and not self._task.done():
            return
        logger.info(f"Starting live update listener on {self.collection}")
        self._task = asyncio.create_task(self._listen())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        self._notify_status({"connected": False, "authenticated": False, "reconnecting": False})
        logger.info("Live update listener stopped")

    async def _listen(self) -> None:
        store = database.get_store(self.collection)
        try:
            async with store.watch() as stream:
                self._notify_status({"connected": True, "authenticated": True, "reconnecting": False})
                async for change in stream:
                    message = build_message(change)
                    if message:
                        self.emit(QUICK_CHECK_EVENT, message)
        except PyMongoError as e:
            logger.error(f"Live update listener error: {e}")
            self.emit(ERROR_EVENT, {"type": ERROR_EVENT, "data": {"message": str(e)}})
            self._notify_status({"connected": False, "authenticated": False, "reconnecting": False})
        except Exception:
            logger.exception("Live update listener stopped unexpectedly")
            self._notify_status({"connected": False, "authenticated": False, "reconnecting": False})

    async def snapshot(self) -> List[Dict[str, Any]]:
        """Most recent quick checks as "created" messages, newest first."""
        records = await database.get_store(self.collection).query(
            order_by="created_at", descending=True, limit=settings.LIVE_UPDATE_LIMIT
        )
        return [{"type": QUICK_CHECK_EVENT, "action": "created", "data": r} for r in records]

    # -------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------
    def on(self, event: str, callback: EventCallback) -> Callable[[], None]:
        self._callbacks.setdefault(event, []).append(callback)
        return lambda: self.off(event, callback)

    def off(self, event: str, callback: EventCallback) -> None:
        callbacks = self._callbacks.get(event)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, message: Dict[str, Any]) -> None:
        for callback in list(self._callbacks.get(event, [])):
            try:
                callback(message)
            except Exception:
                logger.exception(f"Live update callback for '{event}' failed")

    def on_status_change(self, callback: StatusCallback) -> Callable[[], None]:
        self._status_callbacks.append(callback)
        callback(dict(self.status))

        def unsubscribe() -> None:
            if callback in self._status_callbacks:
                self._status_callbacks.remove(callback)

        return unsubscribe

    def _notify_status(self, status: Dict[str, bool]) -> None:
        self.status = status
        for callback in list(self._status_callbacks):
            try:
                callback(dict(status))
            except Exception:
                logger.exception("Live update status callback failed")


live_updates = LiveUpdateService()
