"""Connection model for student-to-student connection requests."""

from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey, UniqueConstraint, Index, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Connection(Base):
    """A connection request from one student to another."""
    
    __tablename__ = "connections"
    
    id = Column(Integer, primary_key=True, index=True)
    
    # Foreign Keys
    requester_id = Column(
        Integer, 
        ForeignKey("users.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    addressee_id = Column(
        Integer, 
        ForeignKey("users.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    
    # pending -> accepted | rejected
    status = Column(String(20), nullable=False, default="pending", index=True)
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    # Constraints & Indexes
    __table_args__ = (
        UniqueConstraint('requester_id', 'addressee_id', name='uq_connection_pair'),
        CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="check_connection_status"
        ),
        Index('idx_connection_addressee_status', 'addressee_id', 'status'),
    )
    
    # Relationships
    requester = relationship("User", foreign_keys=[requester_id])
    addressee = relationship("User", foreign_keys=[addressee_id])
