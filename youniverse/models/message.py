"""Message model for direct messages between students."""

from sqlalchemy import Column, Integer, Text, Boolean, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Message(Base):
    """Direct message from one user to another."""
    
    __tablename__ = "messages"
    
    id = Column(Integer, primary_key=True, index=True)
    
    # Foreign Keys
    sender_id = Column(
        Integer, 
        ForeignKey("users.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    receiver_id = Column(
        Integer, 
        ForeignKey("users.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    
    # Message Content
    content = Column(Text, nullable=False)
    
    # Read Status
    is_read = Column(Boolean, default=False, index=True)
    read_at = Column(TIMESTAMP, nullable=True)
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    
    # Constraints & Indexes
    __table_args__ = (
        # Index untuk query conversation between two users
        Index('idx_message_pair_created', 'sender_id', 'receiver_id', 'created_at'),
        # Index untuk query unread messages
        Index('idx_message_unread', 'receiver_id', 'is_read'),
    )
    
    # Relationships
    sender = relationship("User", foreign_keys=[sender_id])
    receiver = relationship("User", foreign_keys=[receiver_id])
