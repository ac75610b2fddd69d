"""
Core operations: accounts, ticket lifecycle, comments and notification records.
"""

from .accounts import AccountService
from .comments import CommentLog
from .inbox import NotificationInbox
from .tickets import TicketManager

__all__ = ["AccountService", "CommentLog", "NotificationInbox", "TicketManager"]
