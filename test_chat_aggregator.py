"""
Tests for chat list aggregation.
Run: pytest test_chat_aggregator.py
"""

import logging

from youniverse.models.message import Message
from youniverse.services.chat_aggregator import ChatSummary, aggregate_chats

VIEWER = 1


def msg(id, sender, receiver, is_read=False):
    return Message(id=id, sender_id=sender, receiver_id=receiver, content=f"m{id}", is_read=is_read)


def test_empty_input():
    assert aggregate_chats([], VIEWER) == []


def test_unread_from_partner_counted_and_newest_is_last_message():
    a = msg(1, 2, VIEWER)
    b = msg(2, VIEWER, 2)
    c = msg(3, 2, VIEWER)

    chats = aggregate_chats([c, b, a], VIEWER)

    assert len(chats) == 1
    assert chats[0].partner_id == 2
    assert chats[0].last_message is c
    assert chats[0].unread_count == 2


def test_one_summary_per_partner_in_recency_order():
    messages = [
        msg(6, 3, VIEWER),
        msg(5, VIEWER, 2, is_read=False),
        msg(4, 4, VIEWER, is_read=True),
        msg(3, 2, VIEWER, is_read=True),
        msg(2, 3, VIEWER, is_read=False),
        msg(1, 2, VIEWER, is_read=False),
    ]

    chats = aggregate_chats(messages, VIEWER)

    assert [chat.partner_id for chat in chats] == [3, 2, 4]
    assert [chat.last_message.id for chat in chats] == [6, 5, 4]
    assert [chat.unread_count for chat in chats] == [2, 1, 0]


def test_messages_sent_by_viewer_never_count_as_unread():
    chats = aggregate_chats([msg(2, VIEWER, 5), msg(1, VIEWER, 5)], VIEWER)

    assert chats == [ChatSummary(partner_id=5, last_message=chats[0].last_message, unread_count=0)]
    assert chats[0].last_message.id == 2


def test_message_not_involving_viewer_is_skipped(caplog):
    stray = msg(9, 7, 8)
    good = msg(1, 2, VIEWER)

    with caplog.at_level(logging.WARNING, logger="youniverse.services.chat_aggregator"):
        chats = aggregate_chats([stray, good], VIEWER)

    assert [chat.partner_id for chat in chats] == [2]
    assert "Skipping message 9" in caplog.text


def test_rerun_on_same_input_is_identical():
    messages = [msg(3, 2, VIEWER), msg(2, 3, VIEWER), msg(1, 2, VIEWER)]

    first = aggregate_chats(messages, VIEWER)
    second = aggregate_chats(messages, VIEWER)

    assert first == second
    assert first is not second
