"""Services package for Youniverse application."""

from .chat_aggregator import ChatSummary, aggregate_chats
from .comment_threads import CommentThread, build_comment_threads
from .link_preview import build_link_preview
from .notification_service import notification_service, NotificationService

__all__ = [
    "ChatSummary",
    "aggregate_chats",
    "CommentThread",
    "build_comment_threads",
    "build_link_preview",
    "notification_service",
    "NotificationService",
]
