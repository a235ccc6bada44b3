"""Share model for post shares."""

from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Share(Base):
    """Record of a post being shared, inside the app or to an external platform."""
    
    __tablename__ = "shares"
    
    id = Column(Integer, primary_key=True, index=True)
    
    # Foreign Keys
    post_id = Column(
        Integer, 
        ForeignKey("posts.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    user_id = Column(
        Integer, 
        ForeignKey("users.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    
    share_type = Column(String(20), nullable=False)
    platform = Column(String(50), nullable=True)
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())
    
    __table_args__ = (
        CheckConstraint(
            "share_type IN ('internal', 'external', 'link')",
            name="check_share_type"
        ),
    )
    
    # Relationships
    post = relationship("Post", back_populates="shares")
    user = relationship("User", foreign_keys=[user_id])
