"""Relationship between a viewer and a target user.

Both functions are pure: they only look at the connection rows handed in,
so callers re-run them whenever those rows change.
"""

from typing import Iterable

from app.schemas.enums import ConnectionState, ConnectionStatus, RequestDirection


def _target_id(target) -> int | None:
    if target is None:
        return None
    if isinstance(target, int):
        return target
    return getattr(target, "id", None)


def _rows_for_pair(viewer_id: int, target_id: int, connections: Iterable) -> list:
    return [
        c for c in connections
        if (c.requester_id == viewer_id and c.receiver_id == target_id)
        or (c.requester_id == target_id and c.receiver_id == viewer_id)
    ]


def resolve_connection_status(viewer_id, target, connections: Iterable) -> ConnectionStatus:
    """Classify viewer -> target as self, connected, pending or none.

    An accepted row wins over a pending row for the same pair, so a stale
    duplicate never hides an established connection. Pending is reported
    regardless of who sent the request; see resolve_request_direction.
    """
    target_id = _target_id(target)
    if viewer_id is None or target_id is None:
        return ConnectionStatus.none
    if viewer_id == target_id:
        return ConnectionStatus.self

    rows = _rows_for_pair(viewer_id, target_id, connections)

    if any(c.status == ConnectionState.accepted for c in rows):
        return ConnectionStatus.connected
    if any(c.status == ConnectionState.pending for c in rows):
        return ConnectionStatus.pending
    return ConnectionStatus.none


def resolve_request_direction(viewer_id, target, connections: Iterable) -> RequestDirection | None:
    """Who sent the pending request between viewer and target, if any."""
    connections = list(connections)
    if resolve_connection_status(viewer_id, target, connections) != ConnectionStatus.pending:
        return None

    target_id = _target_id(target)
    pending = [
        c for c in _rows_for_pair(viewer_id, target_id, connections)
        if c.status == ConnectionState.pending
    ]
    if any(c.requester_id == viewer_id for c in pending):
        return RequestDirection.outgoing
    return RequestDirection.incoming
