"""
Canonical enums for Support Desk.

These are the allowed values for the typed enum columns in the store. The
rest of the application handles them as plain strings; the enums exist for
request validation and column definitions.
"""

from enum import Enum


class UserRole(str, Enum):
    """Roles a user account can hold."""

    CUSTOMER = "customer"
    AGENT = "agent"
    ADMIN = "admin"


class TicketStatus(str, Enum):
    """Ticket status values. Any status may follow any other."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketPriority(str, Enum):
    """Ticket priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class NotificationType(str, Enum):
    """Categories of notification records."""

    TICKET_CREATED = "ticket_created"
    TICKET_UPDATED = "ticket_updated"
    TICKET_ASSIGNED = "ticket_assigned"
    COMMENT_ADDED = "comment_added"
    WELCOME = "welcome"
    SYSTEM = "system"


def enum_values(enum_cls: type) -> list:
    """Return the string values of an enum, in declaration order."""
    return [member.value for member in enum_cls]
