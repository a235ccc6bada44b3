"""CRUD operations for Message."""

from typing import List
from datetime import datetime
from sqlalchemy import select, func, and_, or_, update
from sqlalchemy.orm import Session

from youniverse.crud.base import CRUDBase
from youniverse.models.message import Message
from youniverse.schemas.message import MessageCreate


class CRUDMessage(CRUDBase[Message, MessageCreate, dict]):
    """CRUD operations for Message."""
    
    def create_message(
        self,
        db: Session,
        *,
        sender_id: int,
        receiver_id: int,
        content: str
    ) -> Message:
        """Create a new unread message."""
        message = Message(
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            is_read=False
        )
        return self._save(db, message)
    
    def get_for_user(
        self,
        db: Session,
        *,
        user_id: int
    ) -> List[Message]:
        """Get every message the user sent or received, newest first.

        No row limit: the chat list needs every partner and every unread
        message. Messages created in the same second keep insertion order via the id.
        """
        stmt = (
            select(Message)
            .where(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        return list(db.scalars(stmt).all())
    
    def get_conversation(
        self,
        db: Session,
        *,
        user_id: int,
        partner_id: int,
        skip: int = 0,
        limit: int = 200
    ) -> List[Message]:
        """Get messages between two users, oldest first for chat UI."""
        stmt = (
            select(Message)
            .where(
                or_(
                    and_(Message.sender_id == user_id, Message.receiver_id == partner_id),
                    and_(Message.sender_id == partner_id, Message.receiver_id == user_id),
                )
            )
            .order_by(Message.created_at.asc(), Message.id.asc())
            .offset(skip)
            .limit(limit)
        )
        return list(db.scalars(stmt).all())
    
    def get_conversation_count(
        self,
        db: Session,
        *,
        user_id: int,
        partner_id: int
    ) -> int:
        stmt = select(func.count(Message.id)).where(
            or_(
                and_(Message.sender_id == user_id, Message.receiver_id == partner_id),
                and_(Message.sender_id == partner_id, Message.receiver_id == user_id),
            )
        )
        return db.scalar(stmt) or 0
    
    def mark_conversation_read(
        self,
        db: Session,
        *,
        reader_id: int,
        partner_id: int
    ) -> int:
        """Mark every unread message from partner to reader as read.
        
        Returns:
            Number of messages marked as read
        """
        stmt = (
            update(Message)
            .where(
                and_(
                    Message.sender_id == partner_id,
                    Message.receiver_id == reader_id,
                    Message.is_read == False
                )
            )
            .values(is_read=True, read_at=datetime.utcnow())
            .execution_options(synchronize_session="fetch")
        )
        try:
            result = db.execute(stmt)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return result.rowcount or 0
    
    def get_unread_count(
        self,
        db: Session,
        *,
        user_id: int
    ) -> int:
        """Get count of unread messages addressed to the user."""
        stmt = select(func.count(Message.id)).where(
            and_(
                Message.receiver_id == user_id,
                Message.is_read == False
            )
        )
        return db.scalar(stmt) or 0


# Create instance
crud_message = CRUDMessage(Message)
