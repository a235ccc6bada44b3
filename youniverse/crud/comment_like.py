"""CRUD operations for CommentLike."""

from typing import Iterable, Set, Tuple
from sqlalchemy import select, and_
from sqlalchemy.orm import Session

from youniverse.crud.base import CRUDBase
from youniverse.models.comment import Comment
from youniverse.models.comment_like import CommentLike


class CRUDCommentLike(CRUDBase[CommentLike, dict, dict]):
    
    def toggle_like(
        self,
        db: Session,
        *,
        comment_id: int,
        user_id: int
    ) -> Tuple[bool, int]:
        """
        Toggle like on a comment.
        
        Returns:
            (is_liked: bool, new_like_count: int)
        """
        comment = db.get(Comment, comment_id)
        if not comment:
            raise ValueError("Comment not found")
        
        stmt = select(CommentLike).where(
            and_(
                CommentLike.comment_id == comment_id,
                CommentLike.user_id == user_id
            )
        )
        existing_like = db.scalars(stmt).first()
        
        if existing_like:
            db.delete(existing_like)
            comment.like_count = max(0, comment.like_count - 1)
            is_liked = False
        else:
            db.add(CommentLike(comment_id=comment_id, user_id=user_id))
            comment.like_count = comment.like_count + 1
            is_liked = True
        
        self._save(db, comment)
        return is_liked, comment.like_count
    
    def get_liked_comment_ids(
        self,
        db: Session,
        *,
        user_id: int,
        comment_ids: Iterable[int]
    ) -> Set[int]:
        comment_ids = list(comment_ids)
        if not comment_ids:
            return set()
        stmt = select(CommentLike.comment_id).where(
            and_(
                CommentLike.user_id == user_id,
                CommentLike.comment_id.in_(comment_ids)
            )
        )
        return set(db.scalars(stmt).all())


crud_comment_like = CRUDCommentLike(CommentLike)
