from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from app.schemas.base import BaseSchema, TimestampedSchema
from app.schemas.enums import ExperienceLevel


# ---------- responses ----------
class UserResponse(TimestampedSchema):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    title: str
    bio: Optional[str] = None
    experience_level: ExperienceLevel
    skills: List[str] = []
    profile_image: Optional[str] = None
    is_online: bool = False
    open_to_collaborate: bool = True
    last_seen: Optional[datetime] = None


class Pagination(BaseSchema):
    skip: int
    limit: int


class MutualsResponse(BaseSchema):
    data: List[UserResponse]
    pagination: Pagination


# ---------- create ----------
class UserCreateRequest(BaseSchema):
    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=200)
    bio: Optional[str] = None
    experience_level: ExperienceLevel
    skills: List[str] = []
    profile_image: Optional[str] = None
    open_to_collaborate: bool = True


# ---------- update ----------
class UserUpdateRequest(BaseSchema):
    username: Optional[str] = Field(None, min_length=3, max_length=50)
    email: Optional[str] = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: Optional[str] = Field(None, min_length=6)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    bio: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    skills: Optional[List[str]] = None
    profile_image: Optional[str] = None
    open_to_collaborate: Optional[bool] = None

    @field_validator(
        "username",
        "email",
        "password",
        "first_name",
        "last_name",
        "title",
        "experience_level",
        "skills",
        "open_to_collaborate",
    )
    @classmethod
    def _not_null(cls, value, info):
        # omit a field to leave it unchanged; these columns have no null
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


# ---------- search ----------
class UserSearchCriteria(BaseSchema):
    query: Optional[str] = None
    experience_level: List[ExperienceLevel] = []
    skills: List[str] = []
    open_to_collaborate: Optional[bool] = None
    is_online: Optional[bool] = None


# ---------- misc ----------
class OnlineStatusRequest(BaseSchema):
    is_online: bool


class LoginRequest(BaseSchema):
    username: str
    password: str
