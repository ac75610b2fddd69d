"""
Outbound notifications: sinks, message templates and the dispatcher.
"""

from .dispatcher import NotificationDispatcher
from .sink import LogSink, NotificationSink

__all__ = ["LogSink", "NotificationDispatcher", "NotificationSink"]
