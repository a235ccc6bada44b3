"""Post model for the social feed."""

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Index, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Post(Base):
    """A feed post, optionally carrying media and a link preview."""
    
    __tablename__ = "posts"
    
    id = Column(Integer, primary_key=True, index=True)
    
    # Foreign Keys
    author_id = Column(
        Integer, 
        ForeignKey("users.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    
    # Post Content
    content = Column(Text, nullable=False)
    tags = Column(JSON, nullable=True)
    media_urls = Column(JSON, nullable=True)
    media_types = Column(JSON, nullable=True)
    link_preview = Column(JSON, nullable=True)
    
    # Metadata
    like_count = Column(Integer, default=0, nullable=False)  # Denormalized
    comment_count = Column(Integer, default=0, nullable=False)  # Denormalized
    share_count = Column(Integer, default=0, nullable=False)  # Denormalized
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    # Constraints & Indexes
    __table_args__ = (
        Index('idx_post_author_created', 'author_id', 'created_at'),
    )
    
    # Relationships
    author = relationship("User", foreign_keys=[author_id])
    likes = relationship(
        "PostLike", 
        back_populates="post",
        cascade="all, delete-orphan"
    )
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at.asc()"
    )
    shares = relationship(
        "Share",
        back_populates="post",
        cascade="all, delete-orphan"
    )
