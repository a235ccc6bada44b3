"""Collapse a viewer's direct messages into one summary per conversation partner."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List

from youniverse.models.message import Message

logger = logging.getLogger(__name__)


@dataclass
class ChatSummary:
    """One conversation as seen by the viewer."""
    partner_id: int
    last_message: Message
    unread_count: int = 0


def aggregate_chats(messages: Iterable[Message], viewer_id: int) -> List[ChatSummary]:
    """
    Group messages by conversation partner.

    Args:
        messages: Messages involving the viewer, newest first
        viewer_id: ID of the user looking at their chat list

    Returns:
        List[ChatSummary]: One entry per partner, most recent conversation first.
            The first message seen for a partner is its last message; unread
            counts only include partner -> viewer messages not yet read.
    """
    chats: Dict[int, ChatSummary] = {}

    for message in messages:
        if message.sender_id == viewer_id:
            partner_id = message.receiver_id
        elif message.receiver_id == viewer_id:
            partner_id = message.sender_id
        else:
            logger.warning(
                f"[CHAT] Skipping message {message.id}: viewer {viewer_id} is neither "
                f"sender ({message.sender_id}) nor receiver ({message.receiver_id})"
            )
            continue

        chat = chats.get(partner_id)
        if chat is None:
            chat = ChatSummary(partner_id=partner_id, last_message=message)
            chats[partner_id] = chat

        if message.sender_id == partner_id and message.receiver_id == viewer_id and not message.is_read:
            chat.unread_count += 1

    # dicts keep insertion order, i.e. order of first encounter
    return list(chats.values())
