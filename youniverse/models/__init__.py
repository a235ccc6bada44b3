"""
SQLAlchemy Models for Youniverse
"""

from ..database import Base
from .user import User
from .connection import Connection
from .message import Message
from .post import Post
from .post_like import PostLike
from .comment import Comment
from .comment_like import CommentLike
from .share import Share
from .notification import Notification

# Export all models
__all__ = [
    "Base",
    "User",
    "Connection",
    "Message",
    "Post",
    "PostLike",
    "Comment",
    "CommentLike",
    "Share",
    "Notification",
]
