from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Text, Boolean, DateTime, ForeignKey, Index

from app.core.db import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)

    # python-side default: sub-second precision on every backend
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    __table_args__ = (
        Index("idx_messages_pair_unread", "sender_id", "receiver_id", "is_read"),
    )
