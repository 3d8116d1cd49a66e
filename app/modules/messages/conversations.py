"""Fold a user's message history into per-partner conversation summaries."""

from dataclasses import dataclass
from typing import Any, Callable, Iterable

from app.core.errors import NotFoundError


@dataclass
class Conversation:
    user: Any
    last_message: Any
    unread_count: int = 0


def _recency(message) -> tuple:
    # ties on created_at go to the higher id
    return (message.created_at, message.id)


def aggregate_conversations(
    viewer_id: int,
    messages: Iterable,
    get_user: Callable[[int], Any],
) -> list[Conversation]:
    """Build one Conversation per partner, most recently active first.

    ``messages`` are all rows where the viewer is sender or receiver.
    ``get_user`` resolves a partner id to a user; a partner that cannot be
    resolved means the store is inconsistent and raises NotFoundError.
    Nothing is mutated: unread messages stay unread.
    """
    last_by_partner: dict[int, Any] = {}
    unread_by_partner: dict[int, int] = {}

    for message in messages:
        if message.sender_id == viewer_id:
            partner_id = message.receiver_id
        elif message.receiver_id == viewer_id:
            partner_id = message.sender_id
        else:
            continue

        current = last_by_partner.get(partner_id)
        if current is None or _recency(message) > _recency(current):
            last_by_partner[partner_id] = message

        unread_by_partner.setdefault(partner_id, 0)
        if message.receiver_id == viewer_id and not message.is_read:
            unread_by_partner[partner_id] += 1

    conversations = []
    for partner_id, last_message in last_by_partner.items():
        user = get_user(partner_id)
        if user is None:
            raise NotFoundError(f"Conversation partner {partner_id} not found")
        conversations.append(
            Conversation(
                user=user,
                last_message=last_message,
                unread_count=unread_by_partner[partner_id],
            )
        )

    conversations.sort(key=lambda c: _recency(c.last_message), reverse=True)
    return conversations
