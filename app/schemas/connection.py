from typing import Optional

from pydantic import Field

from app.schemas.base import BaseSchema, TimestampedSchema
from app.schemas.enums import ConnectionState, ConnectionStatus, RequestDirection


class ConnectionResponse(TimestampedSchema):
    id: int
    requester_id: int
    receiver_id: int
    status: ConnectionState
    message: Optional[str] = None


class ConnectionCreateRequest(BaseSchema):
    requester_id: int
    receiver_id: int
    message: Optional[str] = Field(None, max_length=500)


class ConnectionStatusUpdateRequest(BaseSchema):
    status: ConnectionState


class ConnectionStatusResponse(BaseSchema):
    status: ConnectionStatus
    direction: Optional[RequestDirection] = None
