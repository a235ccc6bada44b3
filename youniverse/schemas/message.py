"""Pydantic schemas for Message."""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

from youniverse.schemas.user import UserResponse


class MessageCreate(BaseModel):
    """Schema for creating a new message."""
    receiver_id: int = Field(..., gt=0, description="User to send the message to")
    content: str = Field(..., min_length=1, max_length=5000, description="Message content")


class MessageResponse(BaseModel):
    """Schema for Message response."""
    id: int
    sender_id: int
    receiver_id: int
    content: str
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class MessageListResponse(BaseModel):
    """Response for one conversation, oldest first."""
    partner: UserResponse
    messages: List[MessageResponse]
    total: int
    marked_read: int = Field(0, description="Partner messages marked read by this request")


class ChatSummaryResponse(BaseModel):
    """One entry in the viewer's chat list."""
    partner: Optional[UserResponse] = None
    partner_id: int
    last_message: MessageResponse
    unread_count: int = 0


class ChatListResponse(BaseModel):
    """Response for listing chats."""
    chats: List[ChatSummaryResponse]
    total: int


class UnreadCountResponse(BaseModel):
    """Response for unread message count."""
    unread_count: int
