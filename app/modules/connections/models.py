from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Enum,
    ForeignKey,
    CheckConstraint,
    UniqueConstraint,
)

from app.core.db import Base
from app.schemas.enums import ConnectionState


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def pair_low_high(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a < b else (b, a)


class Connection(Base):
    __tablename__ = "connections"

    id = Column(Integer, primary_key=True, index=True)
    requester_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # unordered pair, normalized so (a, b) and (b, a) collide
    user_low = Column(Integer, nullable=False)
    user_high = Column(Integer, nullable=False)

    status = Column(
        Enum(ConnectionState, name="connection_status_enum"),
        nullable=False,
        default=ConnectionState.pending,
    )
    message = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_low", "user_high", name="uq_connections_pair"),
        CheckConstraint("requester_id <> receiver_id", name="ck_connections_not_self"),
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.requester_id is not None and self.receiver_id is not None:
            self.user_low, self.user_high = pair_low_high(self.requester_id, self.receiver_id)
