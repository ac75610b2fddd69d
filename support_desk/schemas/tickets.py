"""
Ticket schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, constr

from .enums import TicketPriority, TicketStatus


class CreateTicketRequest(BaseModel):
    """Payload for filing a ticket.

    There is no status field: every ticket starts out ``open``. A status
    sent by the caller is ignored.
    """

    title: constr(min_length=1, max_length=255)
    description: constr(max_length=16000)
    priority: TicketPriority
    customer_id: int


class TicketUpdate(BaseModel):
    """Partial update of a ticket.

    Every field is optional. A field left out (or sent as null) keeps its
    current value, so ``assigned_agent_id`` cannot be cleared once set.
    """

    title: Optional[constr(min_length=1, max_length=255)] = None
    description: Optional[constr(max_length=16000)] = None
    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    assigned_agent_id: Optional[int] = None

    def supplied_fields(self) -> Dict[str, Any]:
        """Fields carrying a value, with enums reduced to their text."""
        values = {}
        for name, value in self.model_dump().items():
            if value is None:
                continue
            values[name] = value.value if hasattr(value, "value") else value
        return values

    def is_empty(self) -> bool:
        """True when no field carries a value."""
        return not self.supplied_fields()


class TicketResponse(BaseModel):
    """Outward view of a ticket."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    status: str
    priority: str
    customer_id: int
    assigned_agent_id: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
