"""Direct messaging endpoints."""

import logging
from typing import Dict
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from youniverse.api.deps import get_current_active_user, get_db
from youniverse.api.v1.endpoints.realtime import manager
from youniverse.core.exceptions import NotFoundException
from youniverse.crud import crud_message, crud_user
from youniverse.models.user import User
from youniverse.schemas.message import (
    ChatListResponse,
    ChatSummaryResponse,
    MessageCreate,
    MessageListResponse,
    MessageResponse,
    UnreadCountResponse,
)
from youniverse.schemas.user import UserResponse
from youniverse.services.chat_aggregator import aggregate_chats
from youniverse.services.notification_service import notification_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/chat",
    tags=["Chat"],
)


@router.get(
    "/chats",
    response_model=ChatListResponse,
    status_code=status.HTTP_200_OK,
    summary="List chats",
    description="""
    One entry per conversation partner, most recent conversation first.
    
    Each entry has the partner's profile, the last message exchanged and the
    number of unread messages from that partner.
    """,
)
def list_chats(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> ChatListResponse:
    messages = crud_message.get_for_user(db, user_id=current_user.id)
    summaries = aggregate_chats(messages, current_user.id)
    
    partner_ids = [summary.partner_id for summary in summaries]
    partners: Dict[int, User] = {}
    if partner_ids:
        partners = {
            user.id: user
            for user in db.scalars(select(User).where(User.id.in_(partner_ids))).all()
        }
    
    chats = []
    for summary in summaries:
        partner = partners.get(summary.partner_id)
        chats.append(ChatSummaryResponse(
            partner=UserResponse.model_validate(partner) if partner else None,
            partner_id=summary.partner_id,
            last_message=MessageResponse.model_validate(summary.last_message),
            unread_count=summary.unread_count,
        ))
    
    return ChatListResponse(chats=chats, total=len(chats))


@router.get(
    "/messages/{partner_id}",
    response_model=MessageListResponse,
    status_code=status.HTTP_200_OK,
    summary="Open a conversation",
    description="""
    Get messages exchanged with `partner_id`, oldest first.
    
    Opening the conversation marks the partner's unread messages to you as read.
    """,
)
def get_conversation(
    partner_id: int,
    background_tasks: BackgroundTasks,
    skip: int = Query(0, ge=0, description="Number of messages to skip"),
    limit: int = Query(200, ge=1, le=500, description="Maximum number of messages to return"),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> MessageListResponse:
    partner = crud_user.get(db, partner_id)
    if not partner:
        raise NotFoundException("User")
    
    marked = crud_message.mark_conversation_read(
        db, reader_id=current_user.id, partner_id=partner_id
    )
    if marked:
        logger.info(f"[CHAT] User {current_user.id} read {marked} message(s) from {partner_id}")
        background_tasks.add_task(manager.notify_refresh, [current_user.id, partner_id], "messages")
    
    messages = crud_message.get_conversation(
        db, user_id=current_user.id, partner_id=partner_id, skip=skip, limit=limit
    )
    total = crud_message.get_conversation_count(db, user_id=current_user.id, partner_id=partner_id)
    
    return MessageListResponse(
        partner=UserResponse.model_validate(partner),
        messages=[MessageResponse.model_validate(msg) for msg in messages],
        total=total,
        marked_read=marked,
    )


@router.post(
    "/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send message",
)
def send_message(
    message_in: MessageCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Send a direct message, notify the receiver and signal both sides to refresh."""
    if message_in.receiver_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot send a message to yourself"
        )
    
    receiver = crud_user.get(db, message_in.receiver_id)
    if not receiver or not receiver.is_active:
        raise NotFoundException("User")
    
    message = crud_message.create_message(
        db,
        sender_id=current_user.id,
        receiver_id=receiver.id,
        content=message_in.content
    )
    
    notification_service.notify_new_message(db, sender=current_user, receiver_id=receiver.id)
    
    background_tasks.add_task(manager.notify_refresh, [current_user.id, receiver.id], "messages")
    background_tasks.add_task(manager.notify_refresh, [receiver.id], "notifications")
    
    return MessageResponse.model_validate(message)


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    status_code=status.HTTP_200_OK,
    summary="Get total unread messages",
)
def get_unread_count(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> UnreadCountResponse:
    return UnreadCountResponse(
        unread_count=crud_message.get_unread_count(db, user_id=current_user.id)
    )
