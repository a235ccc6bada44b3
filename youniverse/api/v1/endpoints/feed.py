"""Social feed endpoints: posts, comments, likes and shares."""

import logging
from typing import List, Optional, Set
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from youniverse.api.deps import get_current_active_user, get_db, get_optional_current_user
from youniverse.api.v1.endpoints.realtime import manager
from youniverse.core.exceptions import NotFoundException
from youniverse.crud import (
    crud_comment,
    crud_comment_like,
    crud_post,
    crud_post_like,
    crud_share,
)
from youniverse.models.comment import Comment
from youniverse.models.post import Post
from youniverse.models.user import User
from youniverse.schemas.post import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostListResponse,
    PostResponse,
    ShareCreate,
    ShareResponse,
)
from youniverse.schemas.user import UserResponse
from youniverse.services.comment_threads import CommentThread, build_comment_threads

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/feed",
    tags=["Feed"],
)


def _comment_response(
    comment: Comment,
    liked_comment_ids: Set[int],
    replies: Optional[List[CommentResponse]] = None,
) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        author_id=comment.author_id,
        author=UserResponse.model_validate(comment.author) if comment.author else None,
        content=comment.content,
        parent_comment_id=comment.parent_comment_id,
        like_count=comment.like_count,
        is_liked=comment.id in liked_comment_ids,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        replies=replies or [],
    )


def _thread_response(thread: CommentThread, liked_comment_ids: Set[int]) -> CommentResponse:
    return _comment_response(
        thread.comment,
        liked_comment_ids,
        replies=[_comment_response(reply, liked_comment_ids) for reply in thread.replies],
    )


def _post_response(
    post: Post,
    *,
    is_liked: bool = False,
    comments: Optional[List[CommentResponse]] = None,
) -> PostResponse:
    return PostResponse(
        id=post.id,
        author_id=post.author_id,
        author=UserResponse.model_validate(post.author) if post.author else None,
        content=post.content,
        tags=post.tags,
        media_urls=post.media_urls,
        media_types=post.media_types,
        link_preview=post.link_preview,
        like_count=post.like_count,
        comment_count=post.comment_count,
        share_count=post.share_count,
        is_liked=is_liked,
        created_at=post.created_at,
        updated_at=post.updated_at,
        comments=comments or [],
    )


@router.get(
    "/posts",
    response_model=PostListResponse,
    status_code=status.HTTP_200_OK,
    summary="List feed posts",
    description="""
    Posts newest first. Each post carries its comments as one-level threads:
    top-level comments oldest first, each with its direct replies oldest first.
    
    `is_liked` flags are only set when the request is authenticated.
    """,
)
def list_posts(
    skip: int = Query(0, ge=0, description="Number of posts to skip"),
    limit: int = Query(20, ge=1, le=100, description="Maximum number of posts to return"),
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> PostListResponse:
    posts = crud_post.get_feed(db, skip=skip, limit=limit)
    post_ids = [post.id for post in posts]
    
    comments = crud_comment.get_by_posts(db, post_ids=post_ids)
    threads = build_comment_threads(comments)
    
    liked_post_ids: Set[int] = set()
    liked_comment_ids: Set[int] = set()
    if current_user:
        liked_post_ids = crud_post_like.get_liked_post_ids(
            db, user_id=current_user.id, post_ids=post_ids
        )
        liked_comment_ids = crud_comment_like.get_liked_comment_ids(
            db, user_id=current_user.id, comment_ids=[c.id for c in comments]
        )
    
    results = [
        _post_response(
            post,
            is_liked=post.id in liked_post_ids,
            comments=[
                _thread_response(thread, liked_comment_ids)
                for thread in threads.get(post.id, [])
            ],
        )
        for post in posts
    ]
    total = crud_post.get_total_count(db)
    
    return PostListResponse(
        posts=results,
        total=total,
        has_more=(skip + len(posts) < total)
    )


@router.post(
    "/posts",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new post",
    description="Media must already be uploaded; pass their URLs and MIME types.",
)
def create_post(
    post_in: PostCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> PostResponse:
    post = crud_post.create_post(db, author_id=current_user.id, post_in=post_in)
    logger.info(f"[FEED] User {current_user.id} created post {post.id}")
    background_tasks.add_task(manager.broadcast_refresh, "feed")
    return _post_response(post)


@router.post(
    "/posts/{post_id}/like",
    response_model=LikeResponse,
    status_code=status.HTTP_200_OK,
    summary="Toggle like on post",
)
def toggle_post_like(
    post_id: int,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> LikeResponse:
    try:
        is_liked, like_count = crud_post_like.toggle_like(
            db, post_id=post_id, user_id=current_user.id
        )
    except ValueError:
        raise NotFoundException("Post")
    
    background_tasks.add_task(manager.broadcast_refresh, "feed")
    return LikeResponse(id=post_id, is_liked=is_liked, like_count=like_count)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    description="Set `parent_comment_id` to reply to a comment on the same post.",
)
def add_comment(
    post_id: int,
    comment_in: CommentCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> CommentResponse:
    try:
        comment = crud_comment.create_comment(
            db,
            post_id=post_id,
            author_id=current_user.id,
            content=comment_in.content,
            parent_comment_id=comment_in.parent_comment_id,
        )
    except LookupError:
        raise NotFoundException("Post")
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    
    background_tasks.add_task(manager.broadcast_refresh, "feed")
    return _comment_response(comment, set())


@router.delete(
    "/posts/{post_id}/comments/{comment_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete comment",
    description="""
    Delete a comment together with its replies.
    
    **Access:** Comment author only
    """,
)
def delete_comment(
    post_id: int,
    comment_id: int,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> dict:
    try:
        deleted = crud_comment.delete_comment(
            db, comment_id=comment_id, post_id=post_id, user_id=current_user.id
        )
    except PermissionError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own comments"
        )
    
    if not deleted:
        raise NotFoundException("Comment")
    
    background_tasks.add_task(manager.broadcast_refresh, "feed")
    return {"message": "Comment deleted"}


@router.post(
    "/comments/{comment_id}/like",
    response_model=LikeResponse,
    status_code=status.HTTP_200_OK,
    summary="Toggle like on comment",
)
def toggle_comment_like(
    comment_id: int,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> LikeResponse:
    try:
        is_liked, like_count = crud_comment_like.toggle_like(
            db, comment_id=comment_id, user_id=current_user.id
        )
    except ValueError:
        raise NotFoundException("Comment")
    
    background_tasks.add_task(manager.broadcast_refresh, "feed")
    return LikeResponse(id=comment_id, is_liked=is_liked, like_count=like_count)


@router.post(
    "/posts/{post_id}/share",
    response_model=ShareResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Share a post",
)
def share_post(
    post_id: int,
    share_in: ShareCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> ShareResponse:
    try:
        post = crud_share.share_post(
            db,
            post_id=post_id,
            user_id=current_user.id,
            share_type=share_in.share_type,
            platform=share_in.platform,
        )
    except ValueError:
        raise NotFoundException("Post")
    
    background_tasks.add_task(manager.broadcast_refresh, "feed")
    return ShareResponse(
        post_id=post.id,
        share_type=share_in.share_type,
        platform=share_in.platform,
        share_count=post.share_count,
    )
