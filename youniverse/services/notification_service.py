"""Service layer for notification management in Youniverse."""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from youniverse.crud.notification import crud_notification
from youniverse.models.notification import Notification
from youniverse.models.user import User
from youniverse.schemas.notification import NOTIFICATION_TYPES

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Service for managing notifications.

    Social actions (connection requests, acceptances, messages) call the
    `notify_*` helpers; the notifications router reads and marks them.
    """

    def create_notification(
        self,
        db: Session,
        *,
        user_id: int,
        title: str,
        message: str,
        notification_type: str,
        related_user_id: Optional[int] = None,
    ) -> Notification:
        """
        Create a new notification.

        Args:
            db: Database session
            user_id: ID of the user to receive the notification
            title: Notification title
            message: Notification message content
            notification_type: One of connection_request, message,
                connection_accepted, new_post
            related_user_id: User whose action triggered the notification

        Returns:
            Notification: The created notification object

        Raises:
            HTTPException: If the type is invalid or the insert fails
        """
        if notification_type not in NOTIFICATION_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid notification_type. Must be one of: {sorted(NOTIFICATION_TYPES)}"
            )

        try:
            notification = crud_notification.create(db, obj_in={
                "user_id": user_id,
                "title": title,
                "message": message,
                "notification_type": notification_type,
                "related_user_id": related_user_id,
                "is_read": False,
            })
        except Exception as e:
            logger.error(f"[NOTIFICATION] Failed to create notification: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create notification"
            ) from e

        logger.info(
            f"[NOTIFICATION] Created: id={notification.id}, "
            f"user_id={user_id}, type={notification_type}"
        )
        return notification

    def notify_connection_request(self, db: Session, *, requester: User, addressee_id: int) -> Notification:
        return self.create_notification(
            db,
            user_id=addressee_id,
            title="New Connection Request",
            message=f"{requester.name} sent you a connection request",
            notification_type="connection_request",
            related_user_id=requester.id,
        )

    def notify_connection_accepted(self, db: Session, *, addressee: User, requester_id: int) -> Notification:
        return self.create_notification(
            db,
            user_id=requester_id,
            title="Connection Accepted",
            message=f"{addressee.name} accepted your connection request",
            notification_type="connection_accepted",
            related_user_id=addressee.id,
        )

    def notify_new_message(self, db: Session, *, sender: User, receiver_id: int) -> Notification:
        return self.create_notification(
            db,
            user_id=receiver_id,
            title="New Message",
            message=f"{sender.name} sent you a message",
            notification_type="message",
            related_user_id=sender.id,
        )

    def mark_as_read(
        self,
        db: Session,
        *,
        notification_id: int,
        user_id: int,
    ) -> Notification:
        """
        Mark a notification as read.

        Raises:
            HTTPException: 404 if not found, 403 if it belongs to someone else
        """
        notification = crud_notification.get(db, notification_id)

        if not notification:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Notification not found"
            )

        if notification.user_id != user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have access to this notification"
            )

        if notification.is_read:
            return notification

        return crud_notification.update(
            db,
            db_obj=notification,
            obj_in={"is_read": True, "read_at": datetime.utcnow()},
        )


# Singleton instance
notification_service = NotificationService()
