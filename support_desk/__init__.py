"""
Support Desk

A support-ticketing backend: accounts, tickets, comments and notifications.
"""

import importlib.metadata

try:
    __version__ = importlib.metadata.version("support-desk")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0"

from .core import AccountService, CommentLog, NotificationInbox, TicketManager
from .notifications import LogSink, NotificationDispatcher, NotificationSink
from .security import TokenClaims, TokenService, hash_password, verify_password

__all__ = [
    "AccountService",
    "CommentLog",
    "LogSink",
    "NotificationDispatcher",
    "NotificationInbox",
    "NotificationSink",
    "TicketManager",
    "TokenClaims",
    "TokenService",
    "hash_password",
    "verify_password",
]
