"""CRUD operations for Share."""

from typing import Optional
from sqlalchemy.orm import Session

from youniverse.crud.base import CRUDBase
from youniverse.models.post import Post
from youniverse.models.share import Share


class CRUDShare(CRUDBase[Share, dict, dict]):
    
    def share_post(
        self,
        db: Session,
        *,
        post_id: int,
        user_id: int,
        share_type: str,
        platform: Optional[str] = None
    ) -> Post:
        """Record a share and bump the post's share counter.

        Returns:
            The updated post
        """
        post = db.get(Post, post_id)
        if not post:
            raise ValueError("Post not found")
        
        db.add(Share(
            post_id=post_id,
            user_id=user_id,
            share_type=share_type,
            platform=platform,
        ))
        post.share_count = post.share_count + 1
        return self._save(db, post)


crud_share = CRUDShare(Share)
