"""
Chat conversations and their messages.

Reads degrade to an empty list when the store refuses access, so a
technician without chat rights still gets a working (empty) inbox.
"""
from typing import Any, Dict, List, Optional

from inspection_api.core import database
from inspection_api.core.clock import now_iso
from inspection_api.core.errors import NotFoundError, PermissionDeniedError
from inspection_api.core.logger import get_logger
from inspection_api.services.user_service import get_users

logger = get_logger(__name__)

CONVERSATIONS = "conversations"
MESSAGES = "messages"


async def get_conversations(user_id: Optional[str]) -> List[Dict[str, Any]]:
    if not user_id:
        return []
    try:
        return await database.get_store(CONVERSATIONS).query({"participants": user_id})
    except PermissionDeniedError as e:
        logger.warning(f"Chat access denied for {user_id}: {e}")
        return []


async def get_messages(conversation_id: Optional[str]) -> List[Dict[str, Any]]:
    if not conversation_id:
        return []
    try:
        return await database.get_store(MESSAGES).query(
            {"conversation_id": conversation_id}, order_by="timestamp"
        )
    except PermissionDeniedError as e:
        logger.warning(f"Chat messages access denied for {conversation_id}: {e}")
        return []


async def send_message(conversation_id: str, message: Dict[str, Any]) -> Dict[str, Any]:
    conversations = database.get_store(CONVERSATIONS)
    if not await conversations.get(conversation_id):
        raise NotFoundError(f"Conversation '{conversation_id}' not found")

    timestamp = now_iso()
    record = {**message, "conversation_id": conversation_id, "timestamp": timestamp}
    message_id = await database.get_store(MESSAGES).add(record)

    # Keep the conversation list sortable by activity
    await conversations.update(conversation_id, {"updated_at": timestamp, "last_message_id": message_id})
    return {"id": message_id, **record}


async def get_chat_users() -> List[Dict[str, Any]]:
    return await get_users()


async def create_conversation(participant_ids: List[str]) -> str:
    timestamp = now_iso()
    conversation_id = await database.get_store(CONVERSATIONS).add({
        "participants": participant_ids,
        "created_at": timestamp,
        "updated_at": timestamp,
    })
    logger.info(f"Created conversation {conversation_id} for {len(participant_ids)} participants")
    return conversation_id


async def delete_conversation(conversation_id: str) -> bool:
    return await database.get_store(CONVERSATIONS).delete(conversation_id)


async def delete_message(conversation_id: str, message_id: str) -> bool:
    store = database.get_store(MESSAGES)
    message = await store.get(message_id)
    if not message or message.get("conversation_id") != conversation_id:
        return False
    return await store.delete(message_id)
