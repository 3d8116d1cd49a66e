from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlalchemy.orm import Session

from app.core.auth import require_viewer_id
from app.core.db import get_db
from app.modules.connections.service import get_mutual_connections
from app.schemas.enums import ExperienceLevel
from app.schemas.user import (
    LoginRequest,
    MutualsResponse,
    OnlineStatusRequest,
    Pagination,
    UserCreateRequest,
    UserResponse,
    UserSearchCriteria,
    UserUpdateRequest,
)
from app.services import users as user_service

router = APIRouter()


# ----------------------------
# LIST / SEARCH
# ----------------------------
@router.get("/users", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return user_service.get_all_users(db)


@router.get("/users/search", response_model=List[UserResponse])
def search_users(
    query: Optional[str] = None,
    experience_level: List[ExperienceLevel] = Query(default=[], alias="experienceLevel"),
    skills: List[str] = Query(default=[]),
    open_to_collaborate: Optional[bool] = Query(default=None, alias="openToCollaborate"),
    is_online: Optional[bool] = Query(default=None, alias="isOnline"),
    db: Session = Depends(get_db),
):
    criteria = UserSearchCriteria(
        query=query,
        experience_level=experience_level,
        skills=skills,
        open_to_collaborate=open_to_collaborate,
        is_online=is_online,
    )
    return user_service.search_users(db, criteria)


# ----------------------------
# SINGLE USER
# ----------------------------
@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.require_user(db, user_id)


@router.post("/users", response_model=UserResponse, status_code=201)
def create_user(payload: UserCreateRequest, db: Session = Depends(get_db)):
    return user_service.create_user(db, payload)


@router.patch("/users/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    payload: UserUpdateRequest,
    db: Session = Depends(get_db),
):
    return user_service.update_user(db, user_id, payload)


@router.post("/users/{user_id}/online-status")
def set_online_status(
    user_id: int,
    payload: OnlineStatusRequest,
    db: Session = Depends(get_db),
):
    user_service.set_user_online_status(db, user_id, payload.is_online)
    return {"message": "Status updated"}


# ----------------------------
# MUTUALS
# ----------------------------
@router.get("/users/{user_id}/mutuals", response_model=MutualsResponse)
def list_mutuals(
    user_id: int,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
    viewer_id: int = Depends(require_viewer_id),
    db: Session = Depends(get_db),
):
    user_service.require_user(db, user_id)
    mutuals = get_mutual_connections(db, viewer_id, user_id, skip=skip, limit=limit)
    return MutualsResponse(
        data=[UserResponse.model_validate(u) for u in mutuals],
        pagination=Pagination(skip=skip, limit=limit),
    )


# ----------------------------
# LOGIN
# ----------------------------
@router.post("/auth/login", response_model=UserResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = user_service.authenticate(db, payload.username, payload.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid username or password")

    logger.info(f"Login | user={user.id}")
    return user
