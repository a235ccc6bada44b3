"""CRUD operations for PostLike."""

from typing import Iterable, Set, Tuple
from sqlalchemy import select, and_
from sqlalchemy.orm import Session

from youniverse.crud.base import CRUDBase
from youniverse.models.post import Post
from youniverse.models.post_like import PostLike


class CRUDPostLike(CRUDBase[PostLike, dict, dict]):
    """CRUD operations for PostLike."""
    
    def toggle_like(
        self,
        db: Session,
        *,
        post_id: int,
        user_id: int
    ) -> Tuple[bool, int]:
        """
        Toggle like on a post.
        
        Returns:
            (is_liked: bool, new_like_count: int)

        Raises:
            ValueError: If the post does not exist
        """
        post = db.get(Post, post_id)
        if not post:
            raise ValueError("Post not found")
        
        stmt = select(PostLike).where(
            and_(
                PostLike.post_id == post_id,
                PostLike.user_id == user_id
            )
        )
        existing_like = db.scalars(stmt).first()
        
        if existing_like:
            db.delete(existing_like)
            post.like_count = max(0, post.like_count - 1)
            is_liked = False
        else:
            db.add(PostLike(post_id=post_id, user_id=user_id))
            post.like_count = post.like_count + 1
            is_liked = True
        
        self._save(db, post)
        return is_liked, post.like_count
    
    def get_liked_post_ids(
        self,
        db: Session,
        *,
        user_id: int,
        post_ids: Iterable[int]
    ) -> Set[int]:
        """IDs among `post_ids` that the user has liked."""
        post_ids = list(post_ids)
        if not post_ids:
            return set()
        stmt = select(PostLike.post_id).where(
            and_(
                PostLike.user_id == user_id,
                PostLike.post_id.in_(post_ids)
            )
        )
        return set(db.scalars(stmt).all())


# Singleton instance
crud_post_like = CRUDPostLike(PostLike)
