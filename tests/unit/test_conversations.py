from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from app.core.errors import NotFoundError
from app.modules.messages.conversations import aggregate_conversations

T0 = datetime(2024, 1, 1, 12, 0, 0)


def msg(id, sender_id, receiver_id, minutes, is_read=False):
    return SimpleNamespace(
        id=id,
        sender_id=sender_id,
        receiver_id=receiver_id,
        content=f"message {id}",
        is_read=is_read,
        created_at=T0 + timedelta(minutes=minutes),
    )


USERS = {uid: SimpleNamespace(id=uid, username=f"user{uid}") for uid in (1, 2, 3, 4)}


def test_single_partner_counts_unread_from_partner():
    messages = [
        msg(1, 1, 2, 1),
        msg(2, 1, 2, 2),
        msg(3, 1, 2, 3),
    ]

    result = aggregate_conversations(2, messages, USERS.get)

    assert len(result) == 1
    convo = result[0]
    assert convo.user.id == 1
    assert convo.last_message.id == 3
    assert convo.unread_count == 3


def test_own_unread_messages_are_not_counted():
    messages = [msg(1, 2, 1, 1), msg(2, 1, 2, 2, is_read=True)]

    result = aggregate_conversations(2, messages, USERS.get)

    assert result[0].unread_count == 0
    assert result[0].last_message.id == 2


def test_single_read_message_still_yields_conversation():
    result = aggregate_conversations(1, [msg(1, 3, 1, 5, is_read=True)], USERS.get)

    assert len(result) == 1
    assert result[0].user.id == 3
    assert result[0].unread_count == 0


def test_most_recent_conversation_first():
    messages = [
        msg(1, 2, 1, 10),
        msg(2, 3, 1, 30),
        msg(3, 1, 4, 20),
    ]

    result = aggregate_conversations(1, messages, USERS.get)

    assert [c.user.id for c in result] == [3, 4, 2]


def test_timestamp_tie_goes_to_highest_id():
    messages = [msg(7, 2, 1, 5), msg(9, 1, 2, 5), msg(8, 2, 1, 5)]

    result = aggregate_conversations(1, messages, USERS.get)

    assert result[0].last_message.id == 9
    assert result[0].unread_count == 2


def test_unknown_partner_raises():
    with pytest.raises(NotFoundError):
        aggregate_conversations(1, [msg(1, 99, 1, 1)], USERS.get)


def test_input_messages_are_not_mutated():
    messages = [msg(1, 2, 1, 1), msg(2, 2, 1, 2)]
    aggregate_conversations(1, messages, USERS.get)
    assert all(not m.is_read for m in messages)


def test_empty_history():
    assert aggregate_conversations(1, [], USERS.get) == []
