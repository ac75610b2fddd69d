"""
Database package for Support Desk.
"""

from .base import Base, get_db, get_engine, init_database, session_scope
from .models import CommentModel, NotificationModel, TicketModel, UserModel

__all__ = [
    "Base",
    "CommentModel",
    "NotificationModel",
    "TicketModel",
    "UserModel",
    "get_db",
    "get_engine",
    "init_database",
    "session_scope",
]
