from loguru import logger
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.services.users import get_users_by_ids, require_user

from .conversations import Conversation, aggregate_conversations
from .models import Message


# ---------- MESSAGING ----------

def send_message(db: Session, sender_id: int, receiver_id: int, content: str) -> Message:
    if not content or not content.strip():
        raise ValidationError("Message content cannot be empty")
    if sender_id == receiver_id:
        raise ValidationError("Cannot message yourself")

    require_user(db, sender_id)
    require_user(db, receiver_id)

    msg = Message(
        sender_id=sender_id,
        receiver_id=receiver_id,
        content=content,
        is_read=False,
    )
    db.add(msg)
    db.commit()
    db.refresh(msg)

    logger.info(f"Message sent | id={msg.id} {sender_id} -> {receiver_id}")
    return msg


def get_messages_between(db: Session, user_a: int, user_b: int) -> list[Message]:
    return (
        db.query(Message)
        .filter(
            or_(
                and_(Message.sender_id == user_a, Message.receiver_id == user_b),
                and_(Message.sender_id == user_b, Message.receiver_id == user_a),
            )
        )
        .order_by(Message.created_at.asc(), Message.id.asc())
        .all()
    )


def get_messages_for_user(db: Session, user_id: int) -> list[Message]:
    return (
        db.query(Message)
        .filter(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
        .all()
    )


def get_conversations(db: Session, user_id: int) -> list[Conversation]:
    messages = get_messages_for_user(db, user_id)

    partner_ids = {
        m.receiver_id if m.sender_id == user_id else m.sender_id
        for m in messages
    }
    partners = get_users_by_ids(db, partner_ids)

    conversations = aggregate_conversations(user_id, messages, partners.get)
    logger.debug(f"Conversations | user={user_id} count={len(conversations)}")
    return conversations


def mark_messages_as_read(db: Session, sender_id: int, receiver_id: int) -> int:
    """Flip every unread sender -> receiver message to read in one UPDATE."""
    updated = (
        db.query(Message)
        .filter(
            Message.sender_id == sender_id,
            Message.receiver_id == receiver_id,
            Message.is_read.is_(False),
        )
        .update({Message.is_read: True}, synchronize_session=False)
    )
    db.commit()

    logger.info(f"Messages marked read | {sender_id} -> {receiver_id} updated={updated}")
    return updated
