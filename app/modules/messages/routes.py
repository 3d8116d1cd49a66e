from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.message import (
    ConversationResponse,
    MarkReadRequest,
    MarkReadResponse,
    MessageCreateRequest,
    MessageResponse,
)

from .service import (
    get_conversations,
    get_messages_between,
    mark_messages_as_read,
    send_message,
)

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/conversation/{user1_id}/{user2_id}", response_model=List[MessageResponse])
def message_thread(user1_id: int, user2_id: int, db: Session = Depends(get_db)):
    return get_messages_between(db, user1_id, user2_id)


@router.get("/conversations/{user_id}", response_model=List[ConversationResponse])
def conversation_list(user_id: int, db: Session = Depends(get_db)):
    return [
        ConversationResponse.model_validate(c)
        for c in get_conversations(db, user_id)
    ]


@router.post("", response_model=MessageResponse, status_code=201)
def message_send(payload: MessageCreateRequest, db: Session = Depends(get_db)):
    return send_message(db, payload.sender_id, payload.receiver_id, payload.content)


@router.post("/mark-read", response_model=MarkReadResponse)
def mark_read(payload: MarkReadRequest, db: Session = Depends(get_db)):
    updated = mark_messages_as_read(db, payload.sender_id, payload.receiver_id)
    return MarkReadResponse(message="Messages marked as read", updated=updated)
