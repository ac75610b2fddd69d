"""Message templates for outbound notifications."""

from typing import Tuple

WELCOME_SUBJECT = "Welcome to Support Ticketing System!"

WELCOME_BODY = (
    "Dear {first_name},\n\n"
    "Welcome to our Support Ticketing System! "
    "Your account has been created successfully.\n\n"
    "Best regards,\n{sender}"
)

TICKET_CREATED_SUBJECT = "New Ticket Created - #{ticket_id}"

TICKET_CREATED_BODY = (
    "A new ticket has been created:\n\n"
    "Title: {title}\n"
    "Ticket ID: {ticket_id}\n\n"
    "We will review your request and get back to you soon.\n\n"
    "Best regards,\n{sender}"
)


def welcome_message(first_name: str, sender: str) -> Tuple[str, str]:
    """Subject and body greeting a newly registered user."""
    return WELCOME_SUBJECT, WELCOME_BODY.format(first_name=first_name, sender=sender)


def ticket_created_message(title: str, ticket_id: int, sender: str) -> Tuple[str, str]:
    """Subject and body confirming a new ticket to its customer."""
    subject = TICKET_CREATED_SUBJECT.format(ticket_id=ticket_id)
    body = TICKET_CREATED_BODY.format(title=title, ticket_id=ticket_id, sender=sender)
    return subject, body
