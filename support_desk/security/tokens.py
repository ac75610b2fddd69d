"""
Session tokens for Support Desk.

Tokens are compact HMAC-signed JWTs asserting who the bearer is. They are
stateless: nothing is stored server side, so a token stays valid until its
expiry even after logout, password change or role change.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
import structlog

from ..config import Settings
from ..errors import TokenExpired, TokenInvalid

logger = structlog.get_logger()

REQUIRED_CLAIMS = ["sub", "email", "role", "exp"]


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenClaims:
    """Assertions embedded in a session token."""

    sub: int
    email: str
    role: str
    exp: datetime


class TokenService:
    """Issues and verifies session tokens with a process-wide secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_hours: int = 24,
        clock: Callable[[], datetime] = utc_now,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_hours = expires_hours
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        """Build the service from settings.

        When no secret is configured a random one is generated, which means
        tokens do not survive a restart and are not shared between workers.
        """
        secret = settings.jwt_secret
        if not secret:
            logger.warning(
                "JWT_SECRET not set, using an ephemeral per-process secret",
                environment=settings.environment,
            )
            secret = secrets.token_urlsafe(32)
        return cls(
            secret,
            algorithm=settings.jwt_algorithm,
            expires_hours=settings.token_expire_hours,
        )

    def issue(self, user_id: int, email: str, role: str) -> str:
        """Create a signed token for the given identity."""
        now = self._clock()
        payload = {
            "sub": str(user_id),
            "email": email,
            "role": role,
            "iat": now,
            "exp": now + timedelta(hours=self.expires_hours),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Check signature and expiry and return the embedded claims.

        Raises:
            TokenExpired: the signature is valid but the token has expired.
            TokenInvalid: anything else is wrong with the token.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired(str(e)) from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalid(str(e)) from e

        try:
            return TokenClaims(
                sub=int(payload["sub"]),
                email=str(payload["email"]),
                role=str(payload["role"]),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (TypeError, ValueError) as e:
            raise TokenInvalid(f"Malformed claims: {e}") from e

    def verify_bearer(self, authorization: Optional[str]) -> TokenClaims:
        """Verify an ``Authorization: Bearer <token>`` header value."""
        if not authorization:
            raise TokenInvalid("Missing bearer token")
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise TokenInvalid("Malformed authorization header")
        return self.verify(token.strip())
