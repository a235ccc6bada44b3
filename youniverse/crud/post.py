"""CRUD operations for Post."""

from typing import List
from sqlalchemy import select, func
from sqlalchemy.orm import Session, joinedload

from youniverse.crud.base import CRUDBase
from youniverse.models.post import Post
from youniverse.schemas.post import PostCreate
from youniverse.services.link_preview import build_link_preview


class CRUDPost(CRUDBase[Post, PostCreate, dict]):
    """CRUD operations for Post."""
    
    def create_post(
        self,
        db: Session,
        *,
        author_id: int,
        post_in: PostCreate
    ) -> Post:
        """Create a new post. Empty media lists are stored as NULL."""
        post = Post(
            author_id=author_id,
            content=post_in.content,
            tags=post_in.tags or None,
            media_urls=post_in.media_urls or None,
            media_types=post_in.media_types or None,
            link_preview=build_link_preview(post_in.link_url) if post_in.link_url else None,
            like_count=0,
            comment_count=0,
            share_count=0,
        )
        return self._save(db, post)
    
    def get_feed(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 20
    ) -> List[Post]:
        """Get posts newest first with their authors loaded."""
        stmt = (
            select(Post)
            .options(joinedload(Post.author))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(db.scalars(stmt).all())
    
    def get_total_count(self, db: Session) -> int:
        """Get total count of posts."""
        return db.scalar(select(func.count(Post.id))) or 0


# Singleton instance
crud_post = CRUDPost(Post)
