from loguru import logger
from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import (
    DuplicateConnectionError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from app.models.user import User
from app.schemas.enums import ConnectionState, ConnectionStatus, RequestDirection
from app.services.users import get_user, get_users_by_ids, require_user

from .models import Connection
from .status import resolve_connection_status, resolve_request_direction

TERMINAL_STATES = (ConnectionState.accepted, ConnectionState.declined)


# ---------- LOOKUPS ----------

def get_connection(db: Session, user_a: int, user_b: int) -> Connection | None:
    """Connection row for the unordered pair, if any."""
    return db.query(Connection).filter(
        or_(
            and_(
                Connection.requester_id == user_a,
                Connection.receiver_id == user_b,
            ),
            and_(
                Connection.requester_id == user_b,
                Connection.receiver_id == user_a,
            ),
        )
    ).first()


def get_connections_for_user(db: Session, user_id: int) -> list[Connection]:
    return (
        db.query(Connection)
        .filter(
            or_(
                Connection.requester_id == user_id,
                Connection.receiver_id == user_id,
            )
        )
        .order_by(Connection.id.asc())
        .all()
    )


def get_pending_requests(db: Session, user_id: int) -> list[Connection]:
    """Pending requests received by the user."""
    return (
        db.query(Connection)
        .filter(
            Connection.receiver_id == user_id,
            Connection.status == ConnectionState.pending,
        )
        .order_by(Connection.created_at.desc(), Connection.id.desc())
        .all()
    )


def _accepted_peer_ids(db: Session, user_id: int) -> list[int]:
    rows = db.query(Connection).filter(
        or_(
            Connection.requester_id == user_id,
            Connection.receiver_id == user_id,
        ),
        Connection.status == ConnectionState.accepted,
    ).all()

    return [
        c.receiver_id if c.requester_id == user_id else c.requester_id
        for c in rows
    ]


def get_accepted_connections(db: Session, user_id: int) -> list[User]:
    users = get_users_by_ids(db, _accepted_peer_ids(db, user_id))
    return [users[uid] for uid in sorted(users)]


def get_mutual_connections(
    db: Session,
    viewer_id: int,
    other_id: int,
    skip: int = 0,
    limit: int = 20,
) -> list[User]:
    """Users with an accepted connection to both viewer and other."""
    mutual_ids = set(_accepted_peer_ids(db, viewer_id)) & set(_accepted_peer_ids(db, other_id))
    mutual_ids -= {viewer_id, other_id}

    page = sorted(mutual_ids)[skip:skip + limit]
    users = get_users_by_ids(db, page)
    return [users[uid] for uid in page if uid in users]


def get_connection_status(
    db: Session,
    viewer_id: int | None,
    target_id: int,
) -> tuple[ConnectionStatus, RequestDirection | None]:
    target = get_user(db, target_id)
    if viewer_id is None or target is None:
        return ConnectionStatus.none, None

    connections = get_connections_for_user(db, viewer_id)
    return (
        resolve_connection_status(viewer_id, target, connections),
        resolve_request_direction(viewer_id, target, connections),
    )


# ---------- CONNECTION LOGIC ----------

def request_connection(
    db: Session,
    requester_id: int,
    receiver_id: int,
    message: str | None = None,
) -> Connection:
    if requester_id == receiver_id:
        raise ValidationError("Cannot connect to self")

    require_user(db, requester_id)
    require_user(db, receiver_id)

    if get_connection(db, requester_id, receiver_id):
        raise DuplicateConnectionError()

    conn = Connection(
        requester_id=requester_id,
        receiver_id=receiver_id,
        status=ConnectionState.pending,
        message=message or None,
    )
    db.add(conn)
    try:
        db.commit()
    except IntegrityError:
        # lost the race against a concurrent request for the same pair
        db.rollback()
        logger.warning(f"Duplicate connection insert | pair=({requester_id}, {receiver_id})")
        raise DuplicateConnectionError()
    db.refresh(conn)

    logger.info(f"Connection requested | id={conn.id} {requester_id} -> {receiver_id}")
    return conn


def update_connection_status(db: Session, connection_id: int, status) -> Connection:
    try:
        new_status = ConnectionState(status)
    except ValueError:
        raise ValidationError(f"Unknown connection status: {status}")

    if new_status not in TERMINAL_STATES:
        raise ValidationError("Status can only be set to accepted or declined")

    # single conditional UPDATE: only one writer can move a row out of pending
    updated = (
        db.query(Connection)
        .filter(
            Connection.id == connection_id,
            Connection.status == ConnectionState.pending,
        )
        .update({Connection.status: new_status}, synchronize_session=False)
    )

    if not updated:
        db.rollback()
        conn = db.get(Connection, connection_id)
        if not conn:
            raise NotFoundError("Connection not found")
        raise InvalidStateError(f"Connection is already {conn.status.value}")

    db.commit()
    conn = db.get(Connection, connection_id)

    logger.info(f"Connection {new_status.value} | id={conn.id}")
    return conn
