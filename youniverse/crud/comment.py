"""CRUD operations for Comment."""

from typing import Iterable, List, Optional
from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload

from youniverse.crud.base import CRUDBase
from youniverse.models.comment import Comment
from youniverse.models.comment_like import CommentLike
from youniverse.models.post import Post


class CRUDComment(CRUDBase[Comment, dict, dict]):
    """CRUD operations for Comment."""
    
    def create_comment(
        self,
        db: Session,
        *,
        post_id: int,
        author_id: int,
        content: str,
        parent_comment_id: Optional[int] = None
    ) -> Comment:
        """
        Create a comment, or a reply when `parent_comment_id` is given.

        Raises:
            LookupError: If the post does not exist
            ValueError: If the parent comment is missing, on another post or
                itself a reply
        """
        post = db.get(Post, post_id)
        if not post:
            raise LookupError("Post not found")
        
        if parent_comment_id is not None:
            parent = db.get(Comment, parent_comment_id)
            if not parent or parent.post_id != post_id:
                raise ValueError("Parent comment not found or invalid")
            if parent.parent_comment_id is not None:
                raise ValueError("Replies can only be made to top-level comments")
        
        comment = Comment(
            post_id=post_id,
            author_id=author_id,
            content=content,
            parent_comment_id=parent_comment_id,
            like_count=0,
        )
        db.add(comment)
        
        post.comment_count = post.comment_count + 1
        return self._save(db, comment)
    
    def get_by_posts(
        self,
        db: Session,
        *,
        post_ids: Iterable[int]
    ) -> List[Comment]:
        """Get all comments for the given posts, oldest first."""
        post_ids = list(post_ids)
        if not post_ids:
            return []
        stmt = (
            select(Comment)
            .options(joinedload(Comment.author))
            .where(Comment.post_id.in_(post_ids))
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        return list(db.scalars(stmt).all())
    
    def delete_comment(
        self,
        db: Session,
        *,
        comment_id: int,
        post_id: int,
        user_id: int
    ) -> Optional[Comment]:
        """Delete a comment and every reply beneath it (only by author).

        Returns None if the comment does not exist on that post.
        """
        comment = db.get(Comment, comment_id)
        if not comment or comment.post_id != post_id:
            return None
        
        if comment.author_id != user_id:
            raise PermissionError("Only comment author can delete the comment")
        
        # Whole subtree, in case older rows nest deeper than one level
        subtree_ids = [comment_id]
        frontier = [comment_id]
        while frontier:
            frontier = list(
                db.scalars(select(Comment.id).where(Comment.parent_comment_id.in_(frontier))).all()
            )
            subtree_ids.extend(frontier)
        removed = len(subtree_ids)
        
        try:
            db.execute(delete(CommentLike).where(CommentLike.comment_id.in_(subtree_ids)))
            db.execute(delete(Comment).where(Comment.id.in_(subtree_ids)))
            
            post = db.get(Post, post_id)
            if post:
                post.comment_count = max(0, post.comment_count - removed)
                db.add(post)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return comment


# Singleton instance
crud_comment = CRUDComment(Comment)
