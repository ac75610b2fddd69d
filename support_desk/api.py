"""
FastAPI application for Support Desk.
"""

from __future__ import annotations

import importlib.metadata
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import List, Optional

import structlog
from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import get_settings
from .core import AccountService, CommentLog, NotificationInbox, TicketManager
from .db.base import init_database
from .deps import (
    get_account_service,
    get_comment_log,
    get_current_claims,
    get_notification_inbox,
    get_ticket_manager,
)
from .errors import SupportDeskError, Unauthorized
from .logging_config import configure_logging
from .schemas import (
    ClaimsResponse,
    CommentResponse,
    CreateCommentRequest,
    CreateTicketRequest,
    LoginRequest,
    LoginResponse,
    NotificationResponse,
    RegisterRequest,
    TicketPriority,
    TicketResponse,
    TicketStatus,
    TicketUpdate,
    UserResponse,
)
from .security import TokenClaims

logger = structlog.get_logger()

settings = get_settings()

ENDPOINT_LISTING = """Support Ticketing System Backend

Available endpoints:
- POST /register - Register new user
- POST /login - Login user
- GET /me - Identity of the bearer token
- GET /users - Get all users
- GET /tickets - Get all tickets
- POST /tickets - Create new ticket
- GET /tickets/{id} - Get ticket
- PUT /tickets/{id} - Update ticket
- DELETE /tickets/{id} - Delete ticket
- POST /tickets/{id}/comments - Add comment
- GET /tickets/{id}/comments - Get ticket comments
- GET /notifications - Get notifications
- PUT /notifications/{id}/read - Mark notification as read

Try visiting /health to test the API!
"""


def _package_version() -> str:
    try:
        return importlib.metadata.version("support-desk")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    configure_logging(settings)
    logger.info("Starting Support Desk", environment=settings.environment)

    try:
        init_database()
    except Exception as e:
        logger.error("Failed to start application", error=str(e))
        raise

    yield

    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.app_name,
    description="Support ticketing backend: accounts, tickets, comments and notifications",
    version=_package_version(),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.exception_handler(SupportDeskError)
async def support_desk_error_handler(request: Request, exc: SupportDeskError) -> JSONResponse:
    """Map domain errors to their outward status and code, hiding the cause."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "Request failed",
        method=request.method,
        path=request.url.path,
        error_code=exc.code,
        detail=exc.detail,
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


# System endpoints
@app.get("/", response_class=PlainTextResponse, tags=["system"])
def root() -> str:
    """List the available endpoints."""
    return ENDPOINT_LISTING


@app.get("/health", tags=["system"])
def health() -> dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "ok", "message": "Support Ticketing System is running"}


@app.get("/version", tags=["system"])
def version() -> dict[str, str]:
    """Return the version of the application."""
    return {"version": _package_version()}


# Account endpoints
@app.post("/register", response_model=UserResponse, status_code=201, tags=["accounts"])
def register(
    payload: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
) -> UserResponse:
    """Register a new user."""
    user = accounts.register(payload)
    return UserResponse.model_validate(user)


@app.post("/login", response_model=LoginResponse, tags=["accounts"])
def login(
    payload: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
) -> LoginResponse:
    """Exchange email and password for a session token."""
    token, user = accounts.login(payload)
    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@app.get("/me", response_model=ClaimsResponse, tags=["accounts"])
def me(claims: TokenClaims = Depends(get_current_claims)) -> ClaimsResponse:
    """Identity asserted by the presented bearer token."""
    return ClaimsResponse(
        user_id=claims.sub,
        email=claims.email,
        role=claims.role,
        expires_at=claims.exp,
    )


@app.get("/users", response_model=List[UserResponse], tags=["accounts"])
def list_users(accounts: AccountService = Depends(get_account_service)) -> List[UserResponse]:
    """List all users, most recent first."""
    return [UserResponse.model_validate(u) for u in accounts.list_users()]


# Ticket endpoints
@app.get("/tickets", response_model=List[TicketResponse], tags=["tickets"])
def list_tickets(
    status: Optional[TicketStatus] = None,
    priority: Optional[TicketPriority] = None,
    customer_id: Optional[int] = None,
    assigned_agent_id: Optional[int] = None,
    manager: TicketManager = Depends(get_ticket_manager),
) -> List[TicketResponse]:
    """List tickets with optional filtering, most recent first."""
    tickets = manager.list(
        status=status.value if status else None,
        priority=priority.value if priority else None,
        customer_id=customer_id,
        assigned_agent_id=assigned_agent_id,
    )
    return [TicketResponse.model_validate(t) for t in tickets]


@app.post("/tickets", response_model=TicketResponse, status_code=201, tags=["tickets"])
def create_ticket(
    payload: CreateTicketRequest,
    manager: TicketManager = Depends(get_ticket_manager),
) -> TicketResponse:
    """File a new ticket. It always starts out open."""
    return TicketResponse.model_validate(manager.create(payload))


@app.get("/tickets/{ticket_id}", response_model=TicketResponse, tags=["tickets"])
def get_ticket(
    ticket_id: int,
    manager: TicketManager = Depends(get_ticket_manager),
) -> TicketResponse:
    """Get a ticket by ID."""
    return TicketResponse.model_validate(manager.get(ticket_id))


@app.put("/tickets/{ticket_id}", response_model=TicketResponse, tags=["tickets"])
def update_ticket(
    ticket_id: int,
    payload: TicketUpdate,
    manager: TicketManager = Depends(get_ticket_manager),
) -> TicketResponse:
    """Partially update a ticket. Omitted fields keep their value."""
    return TicketResponse.model_validate(manager.update(ticket_id, payload))


@app.delete("/tickets/{ticket_id}", status_code=204, tags=["tickets"])
def delete_ticket(
    ticket_id: int,
    manager: TicketManager = Depends(get_ticket_manager),
) -> Response:
    """Delete a ticket."""
    manager.delete(ticket_id)
    return Response(status_code=204)


# Comment endpoints
@app.get("/tickets/{ticket_id}/comments", response_model=List[CommentResponse], tags=["comments"])
def list_comments(
    ticket_id: int,
    comments: CommentLog = Depends(get_comment_log),
) -> List[CommentResponse]:
    """Comments on a ticket, oldest first."""
    return [CommentResponse.model_validate(c) for c in comments.list(ticket_id)]


@app.post(
    "/tickets/{ticket_id}/comments",
    response_model=CommentResponse,
    status_code=201,
    tags=["comments"],
)
def add_comment(
    ticket_id: int,
    payload: CreateCommentRequest,
    comments: CommentLog = Depends(get_comment_log),
) -> CommentResponse:
    """Append a comment to a ticket."""
    comment = comments.append(ticket_id, payload.user_id, payload.content)
    return CommentResponse.model_validate(comment)


# Notification endpoints
@app.get("/notifications", response_model=List[NotificationResponse], tags=["notifications"])
def list_notifications(
    user_id: Optional[int] = None,
    unread_only: bool = False,
    inbox: NotificationInbox = Depends(get_notification_inbox),
) -> List[NotificationResponse]:
    """List notification records, most recent first."""
    return [
        NotificationResponse.model_validate(n)
        for n in inbox.list(user_id=user_id, unread_only=unread_only)
    ]


@app.put(
    "/notifications/{notification_id}/read",
    response_model=NotificationResponse,
    tags=["notifications"],
)
def mark_notification_read(
    notification_id: int,
    inbox: NotificationInbox = Depends(get_notification_inbox),
) -> NotificationResponse:
    """Mark a notification as read."""
    return NotificationResponse.model_validate(inbox.mark_read(notification_id))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
