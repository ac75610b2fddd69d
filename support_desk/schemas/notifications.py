"""
Notification record schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, constr

from .enums import NotificationType


class NotificationCreate(BaseModel):
    """Fields for inserting a notification record."""

    user_id: int
    notification_type: NotificationType
    title: constr(min_length=1, max_length=255)
    message: constr(min_length=1, max_length=4000)
    ticket_id: Optional[int] = None


class NotificationResponse(BaseModel):
    """Outward view of a notification record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    notification_type: str
    title: str
    message: str
    read: bool
    created_at: datetime
    ticket_id: Optional[int] = None
