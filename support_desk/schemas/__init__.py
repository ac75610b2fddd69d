"""
Request and response schemas for Support Desk.
"""

from .comments import CommentResponse, CreateCommentRequest
from .enums import NotificationType, TicketPriority, TicketStatus, UserRole
from .notifications import NotificationCreate, NotificationResponse
from .tickets import CreateTicketRequest, TicketResponse, TicketUpdate
from .users import (
    ClaimsResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserResponse,
)

__all__ = [
    "ClaimsResponse",
    "CommentResponse",
    "CreateCommentRequest",
    "CreateTicketRequest",
    "LoginRequest",
    "LoginResponse",
    "NotificationCreate",
    "NotificationResponse",
    "NotificationType",
    "RegisterRequest",
    "TicketPriority",
    "TicketResponse",
    "TicketStatus",
    "TicketUpdate",
    "UserResponse",
    "UserRole",
]
