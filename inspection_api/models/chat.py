from typing import List
from pydantic import Field

from inspection_api.models.base import CamelModel, DocumentInput


class ChatMessageInput(DocumentInput):
    content: str
    sender_id: str = Field(..., alias="senderId")


class ConversationCreate(CamelModel):
    participant_ids: List[str] = Field(..., min_length=1)
