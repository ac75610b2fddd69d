"""
Per-ticket comment log. Comments are appended and never changed.
"""

from typing import List

import structlog
from sqlalchemy.orm import Session

from ..db.models import CommentModel
from ..db.services import CommentService

logger = structlog.get_logger()


class CommentLog:
    """Append-only comment sequence for tickets."""

    def __init__(self, db: Session):
        self.comments = CommentService(db)

    def append(self, ticket_id: int, author_id: int, content: str) -> CommentModel:
        """Add a comment. Ticket and author must exist in the store."""
        comment = self.comments.create(ticket_id=ticket_id, user_id=author_id, content=content)
        logger.info(
            "Comment added",
            comment_id=comment.id,
            ticket_id=ticket_id,
            user_id=author_id,
        )
        return comment

    def list(self, ticket_id: int) -> List[CommentModel]:
        """Comments on a ticket, oldest first."""
        return self.comments.list_for_ticket(ticket_id)
