from datetime import datetime

from pydantic import Field

from app.schemas.base import BaseSchema
from app.schemas.user import UserResponse


class MessageResponse(BaseSchema):
    id: int
    sender_id: int
    receiver_id: int
    content: str
    is_read: bool
    created_at: datetime


class MessageCreateRequest(BaseSchema):
    sender_id: int
    receiver_id: int
    content: str = Field(..., min_length=1, max_length=5000)


class MarkReadRequest(BaseSchema):
    sender_id: int
    receiver_id: int


class MarkReadResponse(BaseSchema):
    message: str
    updated: int


class ConversationResponse(BaseSchema):
    user: UserResponse
    last_message: MessageResponse
    unread_count: int
