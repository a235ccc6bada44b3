from sqlalchemy import Column, Integer, String, Boolean, TIMESTAMP, ForeignKey, Text, CheckConstraint, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Notification(Base):
    __tablename__ = "notifications"
    
    id = Column(Integer, primary_key=True, index=True)
    
    # Recipient
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    
    # Notification Content
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    
    # Classification
    notification_type = Column(String(50), nullable=False, index=True)
    
    # Status
    is_read = Column(Boolean, default=False, index=True)
    read_at = Column(TIMESTAMP)
    
    # The user whose action triggered this notification
    related_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    
    # Constraints and Indexes
    __table_args__ = (
        CheckConstraint(
            "notification_type IN ('connection_request', 'message', 'connection_accepted', 'new_post')",
            name="check_notification_type"
        ),
        Index("ix_notifications_user_unread", "user_id", "is_read", "created_at"),
    )
    
    # Relationships
    user = relationship("User", foreign_keys=[user_id])
    related_user = relationship("User", foreign_keys=[related_user_id])
