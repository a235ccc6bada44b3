"""Pydantic schemas for the feed: posts, comments, likes and shares."""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from youniverse.schemas.user import UserResponse


class PostCreate(BaseModel):
    """Schema for creating a new post."""
    content: str = Field(..., min_length=1, description="Post content")
    tags: Optional[List[str]] = None
    media_urls: Optional[List[str]] = Field(None, description="URLs of already uploaded media")
    media_types: Optional[List[str]] = Field(None, description="MIME type per media URL")
    link_url: Optional[str] = Field(None, description="Link to attach a preview for")

    @model_validator(mode="after")
    def check_media_types(self) -> "PostCreate":
        if self.media_types and len(self.media_types) != len(self.media_urls or []):
            raise ValueError("media_types must have one entry per media URL")
        return self


class CommentCreate(BaseModel):
    """Schema for creating a comment or a reply."""
    content: str = Field(..., min_length=1, description="Comment content")
    parent_comment_id: Optional[int] = Field(None, gt=0, description="Comment being replied to")


class CommentResponse(BaseModel):
    """Schema for Comment response."""
    id: int
    post_id: int
    author_id: int
    author: Optional[UserResponse] = None
    content: str
    parent_comment_id: Optional[int] = None
    like_count: int
    is_liked: bool = False
    created_at: datetime
    updated_at: datetime
    replies: List["CommentResponse"] = []

    model_config = ConfigDict(from_attributes=True)


CommentResponse.model_rebuild()


class PostResponse(BaseModel):
    """Schema for Post response, with threaded comments."""
    id: int
    author_id: int
    author: Optional[UserResponse] = None
    content: str
    tags: Optional[List[str]] = None
    media_urls: Optional[List[str]] = None
    media_types: Optional[List[str]] = None
    link_preview: Optional[Dict[str, Any]] = None
    like_count: int
    comment_count: int
    share_count: int
    is_liked: bool = False
    created_at: datetime
    updated_at: datetime
    comments: List[CommentResponse] = []

    model_config = ConfigDict(from_attributes=True)


class PostListResponse(BaseModel):
    """Response for listing posts."""
    posts: List[PostResponse]
    total: int
    has_more: bool = Field(..., description="Whether there are more posts to load")


class LikeResponse(BaseModel):
    """Response for a like toggle on a post or a comment."""
    id: int
    is_liked: bool
    like_count: int


class ShareCreate(BaseModel):
    """Schema for sharing a post."""
    share_type: Literal["internal", "external", "link"]
    platform: Optional[str] = Field(None, max_length=50)


class ShareResponse(BaseModel):
    post_id: int
    share_type: str
    platform: Optional[str] = None
    share_count: int
