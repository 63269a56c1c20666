from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException

from inspection_api.core.session import SessionContext
from inspection_api.models.chat import ChatMessageInput, ConversationCreate
from inspection_api.models.response import IdResponse, MessageResponse
from inspection_api.routes.dependencies import require_user
from inspection_api.services import chat_service

chat_router = APIRouter(prefix="/chat", tags=["Chat"])


@chat_router.get("/users", response_model=List[Dict[str, Any]])
async def chat_users(session: SessionContext = Depends(require_user)):
    return await chat_service.get_chat_users()


@chat_router.get("/conversations", response_model=List[Dict[str, Any]])
async def conversations(session: SessionContext = Depends(require_user)):
    return await chat_service.get_conversations(session.user_id)


@chat_router.post("/conversations", response_model=IdResponse, status_code=201)
async def create_conversation(payload: ConversationCreate, session: SessionContext = Depends(require_user)):
    participants = list(dict.fromkeys([session.user_id, *payload.participant_ids]))
    return IdResponse(id=await chat_service.create_conversation(participants))


@chat_router.delete("/conversations/{conversation_id}", response_model=MessageResponse)
async def delete_conversation(conversation_id: str, session: SessionContext = Depends(require_user)):
    await chat_service.delete_conversation(conversation_id)
    return MessageResponse(message="Conversation deleted")


@chat_router.get("/conversations/{conversation_id}/messages", response_model=List[Dict[str, Any]])
async def messages(conversation_id: str, session: SessionContext = Depends(require_user)):
    return await chat_service.get_messages(conversation_id)


@chat_router.post("/conversations/{conversation_id}/messages", status_code=201)
async def send_message(conversation_id: str, payload: ChatMessageInput,
                       session: SessionContext = Depends(require_user)):
    if payload.sender_id != session.user_id:
        raise HTTPException(status_code=403, detail="Cannot send messages as another user")
    return await chat_service.send_message(conversation_id, payload.model_dump(by_alias=True))


@chat_router.delete("/conversations/{conversation_id}/messages/{message_id}", response_model=MessageResponse)
async def delete_message(conversation_id: str, message_id: str, session: SessionContext = Depends(require_user)):
    if not await chat_service.delete_message(conversation_id, message_id):
        raise HTTPException(status_code=404, detail="Message not found")
    return MessageResponse(message="Message deleted")
