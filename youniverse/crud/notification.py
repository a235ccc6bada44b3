"""CRUD operations for `Notification` model."""

from __future__ import annotations

from datetime import datetime
from typing import List

from sqlalchemy import select, and_, func, update
from sqlalchemy.orm import Session

from youniverse.crud.base import CRUDBase
from youniverse.models.notification import Notification
from youniverse.schemas.notification import NotificationCreate


class CRUDNotification(CRUDBase[Notification, NotificationCreate, dict]):
    def get_by_user(
        self, db: Session, *, user_id: int, unread_only: bool = False, limit: int = 100
    ) -> List[Notification]:
        """Get notifications for a specific user, optionally filter unread only."""
        conditions = [Notification.user_id == user_id]
        
        if unread_only:
            conditions.append(Notification.is_read == False)
        
        stmt = (
            select(Notification)
            .where(and_(*conditions))
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
        )
        return list(db.scalars(stmt).all())

    def get_unread_count(self, db: Session, *, user_id: int) -> int:
        stmt = select(func.count(Notification.id)).where(
            and_(Notification.user_id == user_id, Notification.is_read == False)
        )
        return db.scalar(stmt) or 0

    def mark_all_read(self, db: Session, *, user_id: int) -> int:
        """Mark all notifications for a user as read.
        
        Returns the number of notifications marked.
        """
        stmt = (
            update(Notification)
            .where(and_(Notification.user_id == user_id, Notification.is_read == False))
            .values(is_read=True, read_at=datetime.utcnow())
            .execution_options(synchronize_session="fetch")
        )
        try:
            result = db.execute(stmt)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return result.rowcount or 0


# Singleton instance
crud_notification = CRUDNotification(Notification)
