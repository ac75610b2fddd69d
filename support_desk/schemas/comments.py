"""
Comment schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, constr


class CreateCommentRequest(BaseModel):
    """Payload for appending a comment to a ticket."""

    content: constr(min_length=1, max_length=16000)
    user_id: int


class CommentResponse(BaseModel):
    """Outward view of a comment."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    ticket_id: int
    user_id: int
    content: str
    created_at: datetime
