"""
Notification dispatch.

Notification is advisory: it runs after the primary write has committed and
its outcome never affects the result of the operation that triggered it.
"""

import structlog

from ..errors import SinkError
from .sink import NotificationSink
from .templates import ticket_created_message, welcome_message

logger = structlog.get_logger()


class NotificationDispatcher:
    """Forwards notifications to a sink, absorbing every delivery failure."""

    def __init__(self, sink: NotificationSink, sender: str = "Support Team"):
        self.sink = sink
        self.sender = sender

    def dispatch(self, recipient_email: str, subject: str, body: str) -> bool:
        """Send one message. Returns whether the sink accepted it."""
        try:
            self.sink.notify(recipient_email, subject, body)
        except SinkError as e:
            logger.error(
                "Notification delivery failed",
                sink=self.sink.name,
                to=recipient_email,
                subject=subject,
                error=e.detail,
            )
            return False
        except Exception as e:
            logger.exception(
                "Notification sink raised unexpectedly",
                sink=self.sink.name,
                to=recipient_email,
                subject=subject,
                error=str(e),
            )
            return False

        logger.debug("Notification dispatched", sink=self.sink.name, to=recipient_email)
        return True

    def send_welcome(self, email: str, first_name: str) -> bool:
        """Greet a newly registered user."""
        subject, body = welcome_message(first_name, self.sender)
        return self.dispatch(email, subject, body)

    def send_ticket_created(self, email: str, title: str, ticket_id: int) -> bool:
        """Confirm a new ticket to its customer."""
        subject, body = ticket_created_message(title, ticket_id, self.sender)
        return self.dispatch(email, subject, body)
