from datetime import datetime, timezone

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.models.user import User
from app.schemas.user import UserCreateRequest, UserSearchCriteria, UserUpdateRequest


# ---------- LOOKUPS ----------

def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def require_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_users_by_ids(db: Session, user_ids) -> dict[int, User]:
    ids = set(user_ids)
    if not ids:
        return {}
    return {u.id: u for u in db.query(User).filter(User.id.in_(list(ids))).all()}


def get_all_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id.asc()).all()


# ---------- WRITES ----------

def create_user(db: Session, payload: UserCreateRequest) -> User:
    if get_user_by_username(db, payload.username):
        raise ValidationError("Username already exists")
    if get_user_by_email(db, payload.email):
        raise ValidationError("Email already exists")

    user = User(
        **payload.model_dump(),
        is_online=False,
        last_seen=datetime.now(timezone.utc),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Username or email already exists")
    db.refresh(user)

    logger.info(f"User created | id={user.id} username={user.username}")
    return user


def update_user(db: Session, user_id: int, payload: UserUpdateRequest) -> User:
    user = require_user(db, user_id)
    updates = payload.model_dump(exclude_unset=True)

    if "username" in updates and updates["username"] != user.username:
        if get_user_by_username(db, updates["username"]):
            raise ValidationError("Username already exists")
    if "email" in updates and updates["email"] != user.email:
        if get_user_by_email(db, updates["email"]):
            raise ValidationError("Email already exists")

    for field, value in updates.items():
        setattr(user, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Username or email already exists")
    db.refresh(user)

    logger.info(f"User updated | id={user.id} fields={sorted(updates)}")
    return user


def set_user_online_status(db: Session, user_id: int, is_online: bool) -> User:
    user = require_user(db, user_id)
    user.is_online = is_online
    user.last_seen = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)

    logger.debug(f"Online status | id={user_id} online={is_online}")
    return user


# ---------- SEARCH ----------

def _contains(haystack: str | None, needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def _matches_query(user: User, query: str) -> bool:
    q = query.lower()
    return (
        _contains(user.first_name, q)
        or _contains(user.last_name, q)
        or _contains(user.title, q)
        or _contains(user.bio, q)
        or any(_contains(skill, q) for skill in user.skills or [])
    )


def _matches_skills(user: User, skills: list[str]) -> bool:
    wanted = [s.lower() for s in skills if s]
    return any(
        w in (skill or "").lower()
        for skill in user.skills or []
        for w in wanted
    )


def search_users(db: Session, criteria: UserSearchCriteria) -> list[User]:
    """Filter users; every given criterion must hold.

    Scalar filters run in SQL. Text and skill matching run in Python since
    skills are stored as a JSON list.
    """
    q = db.query(User)

    if criteria.experience_level:
        q = q.filter(User.experience_level.in_(criteria.experience_level))
    if criteria.open_to_collaborate is not None:
        q = q.filter(User.open_to_collaborate == criteria.open_to_collaborate)
    if criteria.is_online is not None:
        q = q.filter(User.is_online == criteria.is_online)

    users = q.order_by(User.id.asc()).all()

    if criteria.query and criteria.query.strip():
        users = [u for u in users if _matches_query(u, criteria.query.strip())]
    if criteria.skills:
        users = [u for u in users if _matches_skills(u, criteria.skills)]

    logger.debug(f"User search | criteria={criteria.model_dump(exclude_defaults=True)} hits={len(users)}")
    return users


# ---------- LOGIN ----------

def authenticate(db: Session, username: str, password: str) -> User | None:
    user = get_user_by_username(db, username)
    if not user or user.password != password:
        logger.info(f"Login failed | username={username}")
        return None
    return user
