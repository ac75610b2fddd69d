"""FastAPI dependencies for Support Desk.

Shared collaborators (token service, dispatcher) are built once per process
and never mutated afterwards. Per-request collaborators are built around the
request's database session.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from .config import get_settings
from .core import AccountService, CommentLog, NotificationInbox, TicketManager
from .db.base import get_db
from .notifications import LogSink, NotificationDispatcher
from .security import TokenClaims, TokenService


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    """Process-wide token service."""
    return TokenService.from_settings(get_settings())


@lru_cache(maxsize=1)
def get_dispatcher() -> NotificationDispatcher:
    """Process-wide notification dispatcher."""
    settings = get_settings()
    return NotificationDispatcher(
        LogSink(sender=settings.notification_sender),
        sender=settings.notification_sender,
    )


def get_account_service(
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> AccountService:
    return AccountService(db, tokens, dispatcher)


def get_ticket_manager(
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> TicketManager:
    return TicketManager(db, dispatcher)


def get_comment_log(db: Session = Depends(get_db)) -> CommentLog:
    return CommentLog(db)


def get_notification_inbox(db: Session = Depends(get_db)) -> NotificationInbox:
    return NotificationInbox(db)


def get_current_claims(
    authorization: Optional[str] = Header(default=None),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """Identity of the caller from an ``Authorization: Bearer`` header.

    Raises TokenInvalid or TokenExpired, which the API maps to 401.
    """
    return tokens.verify_bearer(authorization)
