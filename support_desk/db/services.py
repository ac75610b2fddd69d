"""
Database services for Support Desk.

Thin typed CRUD boundary over the store. Lookups return ``None`` for a
missing row; deciding whether that is an error belongs to the caller. Any
store failure is rolled back and surfaced as PersistenceError naming the
operation and entity. Nothing here retries.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import structlog
from sqlalchemy import delete, desc, func, literal, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import Conflict, PersistenceError
from ..schemas.notifications import NotificationCreate
from .models import CommentModel, NotificationModel, TicketModel, UserModel, utc_now

logger = structlog.get_logger()

# Ticket columns a partial update may touch, in statement order.
TICKET_UPDATABLE_FIELDS = (
    "title",
    "description",
    "status",
    "priority",
    "assigned_agent_id",
)


@contextmanager
def store_call(db: Session, operation: str, entity: str) -> Iterator[None]:
    """Translate store failures into PersistenceError after rolling back."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            "Store operation failed",
            operation=operation,
            entity=entity,
            error=str(e),
        )
        raise PersistenceError(operation, entity, e) from e


class UserService:
    """Service for managing user accounts in the database."""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: str,
    ) -> UserModel:
        """Insert a user and return the stored row.

        Raises:
            Conflict: the email is already registered.
        """
        db_user = UserModel(
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
            email_verified=False,
        )

        try:
            self.db.add(db_user)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if self.get_by_email(email) is not None:
                raise Conflict(f"Email {email!r} is already registered") from e
            logger.error("Store operation failed", operation="create", entity="User", error=str(e))
            raise PersistenceError("create", "User", e) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Store operation failed", operation="create", entity="User", error=str(e))
            raise PersistenceError("create", "User", e) from e

        with store_call(self.db, "refresh", "User"):
            self.db.refresh(db_user)
        return db_user

    def get(self, user_id: int) -> Optional[UserModel]:
        """Get a user by ID."""
        with store_call(self.db, "get", "User"):
            return self.db.query(UserModel).filter(UserModel.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[UserModel]:
        """Get a user by email. Matching is case-sensitive."""
        with store_call(self.db, "get_by_email", "User"):
            return self.db.query(UserModel).filter(UserModel.email == email).first()

    def list(self) -> List[UserModel]:
        """All users, most recent first."""
        with store_call(self.db, "list", "User"):
            return (
                self.db.query(UserModel)
                .order_by(desc(UserModel.created_at), desc(UserModel.id))
                .all()
            )


class TicketService:
    """Service for managing tickets in the database."""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        title: str,
        description: str,
        priority: str,
        customer_id: int,
        status: str = "open",
    ) -> TicketModel:
        """Insert a ticket and return the stored row."""
        db_ticket = TicketModel(
            title=title,
            description=description,
            status=status,
            priority=priority,
            customer_id=customer_id,
        )

        with store_call(self.db, "create", "Ticket"):
            self.db.add(db_ticket)
            self.db.commit()
            self.db.refresh(db_ticket)
        return db_ticket

    def get(self, ticket_id: int) -> Optional[TicketModel]:
        """Get a ticket by ID."""
        with store_call(self.db, "get", "Ticket"):
            return (
                self.db.query(TicketModel)
                .populate_existing()
                .filter(TicketModel.id == ticket_id)
                .first()
            )

    def list(
        self,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        customer_id: Optional[int] = None,
        assigned_agent_id: Optional[int] = None,
    ) -> List[TicketModel]:
        """Tickets with optional filtering, most recent first."""
        with store_call(self.db, "list", "Ticket"):
            query = self.db.query(TicketModel)

            if status:
                query = query.filter(TicketModel.status == status)
            if priority:
                query = query.filter(TicketModel.priority == priority)
            if customer_id is not None:
                query = query.filter(TicketModel.customer_id == customer_id)
            if assigned_agent_id is not None:
                query = query.filter(TicketModel.assigned_agent_id == assigned_agent_id)

            return query.order_by(desc(TicketModel.created_at), desc(TicketModel.id)).all()

    def update_fields(self, ticket_id: int, fields: Dict[str, Any]) -> Optional[TicketModel]:
        """Apply a partial update as one coalesce statement.

        Each updatable column becomes ``COALESCE(:value, column)``, so a
        missing or None value keeps the current one. ``updated_at`` is stamped
        unconditionally. Returns None when no row has the given ID.
        """
        unknown = set(fields) - set(TICKET_UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields not updatable: {sorted(unknown)}")

        values = {}
        for name in TICKET_UPDATABLE_FIELDS:
            column = TicketModel.__table__.c[name]
            values[name] = func.coalesce(literal(fields.get(name), column.type), column)
        values["updated_at"] = utc_now()

        stmt = (
            update(TicketModel)
            .where(TicketModel.id == ticket_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        with store_call(self.db, "update", "Ticket"):
            result = self.db.execute(stmt)
            if result.rowcount == 0:
                self.db.rollback()
                return None
            self.db.commit()

        return self.get(ticket_id)

    def delete(self, ticket_id: int) -> int:
        """Hard-delete a ticket. Returns the number of rows removed."""
        stmt = (
            delete(TicketModel)
            .where(TicketModel.id == ticket_id)
            .execution_options(synchronize_session=False)
        )
        with store_call(self.db, "delete", "Ticket"):
            result = self.db.execute(stmt)
            self.db.commit()
        return result.rowcount


class CommentService:
    """Service for managing ticket comments in the database."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, ticket_id: int, user_id: int, content: str) -> CommentModel:
        """Insert a comment and return the stored row."""
        db_comment = CommentModel(ticket_id=ticket_id, user_id=user_id, content=content)

        with store_call(self.db, "create", "Comment"):
            self.db.add(db_comment)
            self.db.commit()
            self.db.refresh(db_comment)
        return db_comment

    def get(self, comment_id: int) -> Optional[CommentModel]:
        """Get a comment by ID."""
        with store_call(self.db, "get", "Comment"):
            return self.db.query(CommentModel).filter(CommentModel.id == comment_id).first()

    def list_for_ticket(self, ticket_id: int) -> List[CommentModel]:
        """Comments on a ticket in the order they were written."""
        with store_call(self.db, "list", "Comment"):
            return (
                self.db.query(CommentModel)
                .filter(CommentModel.ticket_id == ticket_id)
                .order_by(CommentModel.created_at, CommentModel.id)
                .all()
            )


class NotificationService:
    """Service for managing notification records in the database."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, notification: NotificationCreate) -> NotificationModel:
        """Insert a notification record and return the stored row."""
        db_notification = NotificationModel(
            user_id=notification.user_id,
            notification_type=notification.notification_type.value,
            title=notification.title,
            message=notification.message,
            read=False,
            ticket_id=notification.ticket_id,
        )

        with store_call(self.db, "create", "Notification"):
            self.db.add(db_notification)
            self.db.commit()
            self.db.refresh(db_notification)
        return db_notification

    def get(self, notification_id: int) -> Optional[NotificationModel]:
        """Get a notification by ID."""
        with store_call(self.db, "get", "Notification"):
            return (
                self.db.query(NotificationModel)
                .populate_existing()
                .filter(NotificationModel.id == notification_id)
                .first()
            )

    def list(
        self, user_id: Optional[int] = None, unread_only: bool = False
    ) -> List[NotificationModel]:
        """Notifications with optional filtering, most recent first."""
        with store_call(self.db, "list", "Notification"):
            query = self.db.query(NotificationModel)

            if user_id is not None:
                query = query.filter(NotificationModel.user_id == user_id)
            if unread_only:
                query = query.filter(NotificationModel.read.is_(False))

            return query.order_by(
                desc(NotificationModel.created_at), desc(NotificationModel.id)
            ).all()

    def mark_read(self, notification_id: int) -> Optional[NotificationModel]:
        """Flip the read flag on. Returns None when no row has the given ID."""
        stmt = (
            update(NotificationModel)
            .where(NotificationModel.id == notification_id)
            .values(read=True)
            .execution_options(synchronize_session=False)
        )

        with store_call(self.db, "mark_read", "Notification"):
            result = self.db.execute(stmt)
            if result.rowcount == 0:
                self.db.rollback()
                return None
            self.db.commit()

        return self.get(notification_id)
