from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth import get_viewer_id
from app.core.db import get_db
from app.schemas.connection import (
    ConnectionCreateRequest,
    ConnectionResponse,
    ConnectionStatusResponse,
    ConnectionStatusUpdateRequest,
)
from app.schemas.user import UserResponse
from app.services.users import require_user

from .service import (
    get_accepted_connections,
    get_connection_status,
    get_connections_for_user,
    get_pending_requests,
    request_connection,
    update_connection_status,
)

router = APIRouter(prefix="/connections", tags=["connections"])


@router.get("/user/{user_id}", response_model=List[ConnectionResponse])
def list_connections(user_id: int, db: Session = Depends(get_db)):
    return get_connections_for_user(db, user_id)


@router.get("/pending/{user_id}", response_model=List[ConnectionResponse])
def list_pending(user_id: int, db: Session = Depends(get_db)):
    return get_pending_requests(db, user_id)


@router.get("/accepted/{user_id}", response_model=List[UserResponse])
def list_accepted(user_id: int, db: Session = Depends(get_db)):
    require_user(db, user_id)
    return get_accepted_connections(db, user_id)


@router.get("/status/{target_id}", response_model=ConnectionStatusResponse)
def connection_status(
    target_id: int,
    viewer_id: int | None = Depends(get_viewer_id),
    db: Session = Depends(get_db),
):
    status, direction = get_connection_status(db, viewer_id, target_id)
    return ConnectionStatusResponse(status=status, direction=direction)


@router.post("", response_model=ConnectionResponse, status_code=201)
def create_connection(
    payload: ConnectionCreateRequest,
    db: Session = Depends(get_db),
):
    return request_connection(
        db,
        payload.requester_id,
        payload.receiver_id,
        payload.message,
    )


@router.patch("/{connection_id}/status", response_model=ConnectionResponse)
def change_status(
    connection_id: int,
    payload: ConnectionStatusUpdateRequest,
    db: Session = Depends(get_db),
):
    return update_connection_status(db, connection_id, payload.status)
