"""CRUD operations for Connection."""

from typing import Dict, List, Optional

from sqlalchemy import select, and_, or_
from sqlalchemy.orm import Session, joinedload

from youniverse.crud.base import CRUDBase
from youniverse.models.connection import Connection
from youniverse.models.user import User


class CRUDConnection(CRUDBase[Connection, dict, dict]):
    """CRUD operations for Connection."""

    def get_between(
        self,
        db: Session,
        *,
        user_a: int,
        user_b: int
    ) -> Optional[Connection]:
        """Get the connection between two users, whichever of them asked."""
        stmt = select(Connection).where(
            or_(
                and_(Connection.requester_id == user_a, Connection.addressee_id == user_b),
                and_(Connection.requester_id == user_b, Connection.addressee_id == user_a),
            )
        )
        return db.scalars(stmt).first()

    def create_request(
        self,
        db: Session,
        *,
        requester_id: int,
        addressee_id: int
    ) -> Connection:
        """
        Create a pending request.

        Raises:
            ValueError: Self-request or unknown addressee
            LookupError: A pending or accepted connection already exists between the pair
        """
        if requester_id == addressee_id:
            raise ValueError("Cannot send a connection request to yourself")

        addressee = db.get(User, addressee_id)
        if not addressee or not addressee.is_active:
            raise ValueError("User not found")

        connection = self.get_between(db, user_a=requester_id, user_b=addressee_id)
        if connection and connection.status != "rejected":
            raise LookupError("Connection already exists")

        if connection is None:
            connection = Connection()
        # A rejected request is reopened in the new direction
        connection.requester_id = requester_id
        connection.addressee_id = addressee_id
        connection.status = "pending"
        return self._save(db, connection)

    def respond(
        self,
        db: Session,
        *,
        connection_id: int,
        user_id: int,
        accept: bool
    ) -> Optional[Connection]:
        """
        Accept or reject a pending request addressed to `user_id`.

        Returns None if the connection does not exist.

        Raises:
            PermissionError: The user is not the addressee
            LookupError: The request is no longer pending
        """
        connection = self.get(db, connection_id)
        if not connection:
            return None

        if connection.addressee_id != user_id:
            raise PermissionError("Only the addressee can respond to this request")

        if connection.status != "pending":
            raise LookupError(f"Connection request already {connection.status}")

        connection.status = "accepted" if accept else "rejected"
        return self._save(db, connection)

    def get_accepted(
        self,
        db: Session,
        *,
        user_id: int
    ) -> List[Connection]:
        """Accepted connections where the user is either side."""
        stmt = (
            select(Connection)
            .options(joinedload(Connection.requester), joinedload(Connection.addressee))
            .where(
                and_(
                    or_(Connection.requester_id == user_id, Connection.addressee_id == user_id),
                    Connection.status == "accepted"
                )
            )
            .order_by(Connection.updated_at.desc(), Connection.id.desc())
        )
        return list(db.scalars(stmt).all())

    def get_pending_for(
        self,
        db: Session,
        *,
        user_id: int
    ) -> List[Connection]:
        """Pending requests addressed to the user."""
        stmt = (
            select(Connection)
            .options(joinedload(Connection.requester), joinedload(Connection.addressee))
            .where(
                and_(
                    Connection.addressee_id == user_id,
                    Connection.status == "pending"
                )
            )
            .order_by(Connection.created_at.desc(), Connection.id.desc())
        )
        return list(db.scalars(stmt).all())

    def get_status_map(
        self,
        db: Session,
        *,
        user_id: int
    ) -> Dict[int, str]:
        """
        Map every other user the viewer has a live connection with to
        `"pending"` or `"connected"`. Rejected requests are left out.
        """
        stmt = select(Connection).where(
            and_(
                or_(Connection.requester_id == user_id, Connection.addressee_id == user_id),
                Connection.status != "rejected"
            )
        )
        statuses: Dict[int, str] = {}
        for connection in db.scalars(stmt).all():
            other_id = (
                connection.addressee_id if connection.requester_id == user_id
                else connection.requester_id
            )
            statuses[other_id] = "connected" if connection.status == "accepted" else "pending"
        return statuses


# Singleton instance
crud_connection = CRUDConnection(Connection)
