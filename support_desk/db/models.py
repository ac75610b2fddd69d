"""
SQLAlchemy models for Support Desk.

Enum columns are stored as typed enums in the database but read and written
as plain strings, so nothing outside this package depends on the store's
native enum representation.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import func

from ..schemas.enums import (
    NotificationType,
    TicketPriority,
    TicketStatus,
    UserRole,
    enum_values,
)
from .base import Base


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def _iso(value: Any) -> Any:
    return value.isoformat() if value else None


user_role_enum = Enum(*enum_values(UserRole), name="user_role")
ticket_status_enum = Enum(*enum_values(TicketStatus), name="ticket_status")
ticket_priority_enum = Enum(*enum_values(TicketPriority), name="ticket_priority")
notification_type_enum = Enum(*enum_values(NotificationType), name="notification_type")


class UserModel(Base):
    """SQLAlchemy model for user accounts."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(user_role_enum, nullable=False, default=UserRole.CUSTOMER.value)
    email_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utc_now, server_default=func.now()
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary. The password hash is left out."""
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "role": self.role,
            "email_verified": self.email_verified,
            "created_at": _iso(self.created_at),
        }


class TicketModel(Base):
    """SQLAlchemy model for tickets."""

    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(
        ticket_status_enum, nullable=False, default=TicketStatus.OPEN.value, index=True
    )
    priority = Column(
        ticket_priority_enum,
        nullable=False,
        default=TicketPriority.MEDIUM.value,
        index=True,
    )

    # People
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    assigned_agent_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utc_now, server_default=func.now()
    )
    updated_at = Column(DateTime(timezone=True), nullable=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("ix_tickets_created_at", "created_at"),)

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "customer_id": self.customer_id,
            "assigned_agent_id": self.assigned_agent_id,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
            "resolved_at": _iso(self.resolved_at),
        }


class CommentModel(Base):
    """SQLAlchemy model for ticket comments. Append-only."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ticket_id = Column(
        Integer, ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utc_now, server_default=func.now()
    )

    __table_args__ = (Index("ix_comments_ticket_created", "ticket_id", "created_at"),)

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary."""
        return {
            "id": self.id,
            "ticket_id": self.ticket_id,
            "user_id": self.user_id,
            "content": self.content,
            "created_at": _iso(self.created_at),
        }


class NotificationModel(Base):
    """SQLAlchemy model for notification records."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    notification_type = Column(notification_type_enum, nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utc_now, server_default=func.now()
    )
    ticket_id = Column(
        Integer, ForeignKey("tickets.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (Index("ix_notifications_user_read", "user_id", "read"),)

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "notification_type": self.notification_type,
            "title": self.title,
            "message": self.message,
            "read": self.read,
            "created_at": _iso(self.created_at),
            "ticket_id": self.ticket_id,
        }
