"""
Queryable notification records.

These rows are independent of outbound delivery: dispatching a message does
not create one, and creating one does not send anything.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..db.models import NotificationModel
from ..db.services import NotificationService
from ..errors import NotFound
from ..schemas.notifications import NotificationCreate


class NotificationInbox:
    """Read and acknowledge notification records."""

    def __init__(self, db: Session):
        self.notifications = NotificationService(db)

    def record(self, notification: NotificationCreate) -> NotificationModel:
        return self.notifications.create(notification)

    def list(self, user_id: Optional[int] = None, unread_only: bool = False) -> List[NotificationModel]:
        return self.notifications.list(user_id=user_id, unread_only=unread_only)

    def mark_read(self, notification_id: int) -> NotificationModel:
        """Flip the read flag on, or raise NotFound."""
        notification = self.notifications.mark_read(notification_id)
        if notification is None:
            raise NotFound("Notification", notification_id)
        return notification
