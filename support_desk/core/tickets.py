"""
Ticket lifecycle management.

Creation, partial mutation, deletion and reads of tickets. Status and
priority are free-form tags: any value may follow any other, and
``resolved_at`` is never stamped here.
"""

from typing import List, Optional

import structlog
from sqlalchemy.orm import Session

from ..db.models import TicketModel
from ..db.services import TicketService, UserService
from ..errors import BadRequest, NotFound, SupportDeskError
from ..notifications import NotificationDispatcher
from ..schemas.enums import TicketStatus
from ..schemas.tickets import CreateTicketRequest, TicketUpdate

logger = structlog.get_logger()


class TicketManager:
    """Orchestrates ticket operations and their notification side effects."""

    def __init__(self, db: Session, dispatcher: NotificationDispatcher):
        self.tickets = TicketService(db)
        self.users = UserService(db)
        self.dispatcher = dispatcher

    def create(self, request: CreateTicketRequest) -> TicketModel:
        """File a new ticket. Status always starts as ``open``.

        The customer is notified after the insert commits. Failing to look
        up the customer or to deliver the message leaves the ticket in place.
        """
        ticket = self.tickets.create(
            title=request.title,
            description=request.description,
            priority=request.priority.value,
            customer_id=request.customer_id,
            status=TicketStatus.OPEN.value,
        )
        logger.info(
            "Ticket created",
            ticket_id=ticket.id,
            customer_id=ticket.customer_id,
            priority=ticket.priority,
        )

        self._notify_customer(ticket)
        return ticket

    def _notify_customer(self, ticket: TicketModel) -> None:
        try:
            customer = self.users.get(ticket.customer_id)
        except SupportDeskError as e:
            logger.warning(
                "Skipping ticket notification, customer lookup failed",
                ticket_id=ticket.id,
                error=e.detail,
            )
            return

        if customer is None:
            logger.warning(
                "Skipping ticket notification, customer not found",
                ticket_id=ticket.id,
                customer_id=ticket.customer_id,
            )
            return

        self.dispatcher.send_ticket_created(customer.email, ticket.title, ticket.id)

    def update(self, ticket_id: int, changes: TicketUpdate) -> TicketModel:
        """Apply a partial update.

        Raises:
            BadRequest: no field was supplied. The store is not touched.
            NotFound: no ticket has this ID.
        """
        fields = changes.supplied_fields()
        if not fields:
            raise BadRequest("Ticket update must supply at least one field")

        ticket = self.tickets.update_fields(ticket_id, fields)
        if ticket is None:
            raise NotFound("Ticket", ticket_id)

        logger.info("Ticket updated", ticket_id=ticket_id, fields=sorted(fields))
        return ticket

    def delete(self, ticket_id: int) -> None:
        """Hard-delete a ticket.

        Raises:
            NotFound: no ticket has this ID.
        """
        if self.tickets.delete(ticket_id) == 0:
            raise NotFound("Ticket", ticket_id)
        logger.info("Ticket deleted", ticket_id=ticket_id)

    def get(self, ticket_id: int) -> TicketModel:
        """Get a ticket by ID or raise NotFound."""
        ticket = self.tickets.get(ticket_id)
        if ticket is None:
            raise NotFound("Ticket", ticket_id)
        return ticket

    def list(
        self,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        customer_id: Optional[int] = None,
        assigned_agent_id: Optional[int] = None,
    ) -> List[TicketModel]:
        """All tickets, most recent first."""
        return self.tickets.list(
            status=status,
            priority=priority,
            customer_id=customer_id,
            assigned_agent_id=assigned_agent_id,
        )
