"""
Account registration and login.
"""

from typing import List, Tuple

import structlog
from sqlalchemy.orm import Session

from ..db.models import UserModel
from ..db.services import UserService
from ..errors import Conflict, NotFound, Unauthorized
from ..notifications import NotificationDispatcher
from ..schemas.users import LoginRequest, RegisterRequest
from ..security import TokenService, hash_password, verify_password

logger = structlog.get_logger()


class AccountService:
    """Registers users and exchanges credentials for session tokens."""

    def __init__(
        self,
        db: Session,
        tokens: TokenService,
        dispatcher: NotificationDispatcher,
    ):
        self.users = UserService(db)
        self.tokens = tokens
        self.dispatcher = dispatcher

    def register(self, request: RegisterRequest) -> UserModel:
        """Create an account and send a welcome message.

        Raises:
            Conflict: the email is already registered.
        """
        if self.users.get_by_email(request.email) is not None:
            raise Conflict(f"Email {request.email!r} is already registered")

        user = self.users.create(
            email=request.email,
            password_hash=hash_password(request.password),
            first_name=request.first_name,
            last_name=request.last_name,
            role=request.role.value,
        )
        logger.info("User registered", user_id=user.id, role=user.role)

        self.dispatcher.send_welcome(user.email, user.first_name)
        return user

    def login(self, request: LoginRequest) -> Tuple[str, UserModel]:
        """Check credentials and issue a token.

        Raises:
            Unauthorized: unknown email or wrong password.
            CredentialFormatError: the stored hash record is corrupt.
        """
        user = self.users.get_by_email(request.email)
        if user is None:
            logger.info("Login rejected", reason="unknown_email")
            raise Unauthorized("Invalid email or password")

        if not verify_password(request.password, user.password_hash):
            logger.info("Login rejected", reason="bad_password", user_id=user.id)
            raise Unauthorized("Invalid email or password")

        token = self.tokens.issue(user.id, user.email, user.role)
        logger.info("User logged in", user_id=user.id)
        return token, user

    def list_users(self) -> List[UserModel]:
        """All users, most recent first."""
        return self.users.list()

    def get_user(self, user_id: int) -> UserModel:
        """Get a user by ID or raise NotFound."""
        user = self.users.get(user_id)
        if user is None:
            raise NotFound("User", user_id)
        return user
