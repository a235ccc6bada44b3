"""CRUD operations package - exports singleton instances for all models."""

from .base import CRUDBase
from .user import crud_user
from .connection import crud_connection
from .message import crud_message
from .post import crud_post
from .post_like import crud_post_like
from .comment import crud_comment
from .comment_like import crud_comment_like
from .share import crud_share
from .notification import crud_notification


__all__ = [
    # Base
    "CRUDBase",
    # CRUD instances
    "crud_user",
    "crud_connection",
    "crud_message",
    "crud_post",
    "crud_post_like",
    "crud_comment",
    "crud_comment_like",
    "crud_share",
    "crud_notification",
]
