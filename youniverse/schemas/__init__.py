from .user import (
	UserCreate,
	ProfileUpdate,
	ProfileComplete,
	UserResponse,
	StudentResponse,
	StudentListResponse,
	TokenResponse,
	RegisterResponse,
)
from .connection import (
	ConnectionCreate,
	ConnectionResponse,
	ConnectionWithProfiles,
	ConnectionListResponse,
)
from .message import (
	MessageCreate,
	MessageResponse,
	MessageListResponse,
	ChatSummaryResponse,
	ChatListResponse,
	UnreadCountResponse,
)
from .post import (
	PostCreate,
	PostResponse,
	PostListResponse,
	CommentCreate,
	CommentResponse,
	LikeResponse,
	ShareCreate,
	ShareResponse,
)
from .notification import (
	NotificationCreate,
	NotificationResponse,
	NotificationListResponse,
)

__all__ = [
	# User
	"UserCreate",
	"ProfileUpdate",
	"ProfileComplete",
	"UserResponse",
	"StudentResponse",
	"StudentListResponse",
	"TokenResponse",
	"RegisterResponse",
	# Connection
	"ConnectionCreate",
	"ConnectionResponse",
	"ConnectionWithProfiles",
	"ConnectionListResponse",
	# Message
	"MessageCreate",
	"MessageResponse",
	"MessageListResponse",
	"ChatSummaryResponse",
	"ChatListResponse",
	"UnreadCountResponse",
	# Feed
	"PostCreate",
	"PostResponse",
	"PostListResponse",
	"CommentCreate",
	"CommentResponse",
	"LikeResponse",
	"ShareCreate",
	"ShareResponse",
	# Notification
	"NotificationCreate",
	"NotificationResponse",
	"NotificationListResponse",
]
