"""
Notification sinks.

A sink is the external system that actually delivers a message. The
contract is the same whether the sink writes to a log or hands the message
to an email, SMS or push provider: ``notify`` returns on success and raises
SinkError on failure.
"""

from abc import ABC, abstractmethod

import structlog

logger = structlog.get_logger()


class NotificationSink(ABC):
    """Abstract delivery channel for notifications."""

    name: str = "sink"

    @abstractmethod
    def notify(self, to: str, subject: str, body: str) -> None:
        """Deliver one message.

        Raises:
            SinkError: delivery failed.
        """


class LogSink(NotificationSink):
    """Writes messages to the application log instead of sending them."""

    name = "log"

    def __init__(self, sender: str = "Support Team"):
        self.sender = sender

    def notify(self, to: str, subject: str, body: str) -> None:
        logger.info(
            "Notification would be sent",
            sink=self.name,
            sender=self.sender,
            to=to,
            subject=subject,
            body=body,
        )
