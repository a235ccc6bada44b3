"""Pydantic schemas for Connection."""

from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field

from youniverse.schemas.user import UserResponse


class ConnectionCreate(BaseModel):
    """Schema for sending a connection request."""
    addressee_id: int = Field(..., gt=0, description="User to connect with")


class ConnectionResponse(BaseModel):
    """Schema for Connection response."""
    id: int
    requester_id: int
    addressee_id: int
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ConnectionWithProfiles(ConnectionResponse):
    """Connection with both participants' profiles."""
    requester: UserResponse
    addressee: UserResponse


class ConnectionListResponse(BaseModel):
    """Response for listing connections."""
    connections: List[ConnectionWithProfiles]
    total: int
