"""Pydantic schemas for `Notification` domain objects."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


NOTIFICATION_TYPES = {
    "connection_request",
    "message",
    "connection_accepted",
    "new_post",
}


class NotificationCreate(BaseModel):
    user_id: int
    title: str
    message: str
    notification_type: str
    related_user_id: Optional[int] = None

    @field_validator("notification_type")
    @classmethod
    def validate_notification_type(cls, v: str) -> str:
        if v not in NOTIFICATION_TYPES:
            raise ValueError(f"Notification type must be one of {sorted(NOTIFICATION_TYPES)}")
        return v


class NotificationResponse(BaseModel):
    id: int
    user_id: int
    title: str
    message: str
    notification_type: str
    is_read: bool
    read_at: Optional[datetime] = None
    related_user_id: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationListResponse(BaseModel):
    notifications: List[NotificationResponse]
    total: int
    unread_count: int
