"""Comment model for post comments and replies."""

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Comment(Base):
    """Comment on a post. A non-null parent_comment_id makes it a reply."""
    
    __tablename__ = "comments"
    
    id = Column(Integer, primary_key=True, index=True)
    
    # Foreign Keys
    post_id = Column(
        Integer, 
        ForeignKey("posts.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    author_id = Column(
        Integer, 
        ForeignKey("users.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    parent_comment_id = Column(
        Integer, 
        ForeignKey("comments.id", ondelete="CASCADE"), 
        nullable=True, 
        index=True
    )
    
    # Comment Content
    content = Column(Text, nullable=False)
    like_count = Column(Integer, default=0, nullable=False)
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    # Constraints & Indexes
    __table_args__ = (
        Index('idx_comment_post_created', 'post_id', 'created_at'),
    )
    
    # Relationships
    post = relationship("Post", back_populates="comments")
    author = relationship("User", foreign_keys=[author_id])
    likes = relationship(
        "CommentLike",
        back_populates="comment",
        cascade="all, delete-orphan"
    )
