"""
Error taxonomy for Support Desk.

Every failure a caller can observe is one of the kinds below. Each kind
carries a stable outward ``code`` and a fixed outward message; the internal
cause (store error text, decoder message) stays in ``detail`` and is only
ever logged.
"""

from typing import Any, Dict, Optional


class SupportDeskError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    public_message: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.public_message
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Outward representation. Never includes ``detail``."""
        return {
            "error": {
                "code": self.code,
                "message": self.public_message,
            }
        }


class NotFound(SupportDeskError):
    """No row matches the requested id or key."""

    status_code = 404
    code = "NOT_FOUND"
    public_message = "Resource not found"

    def __init__(self, entity: str, key: Any):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key!r} not found")


class Conflict(SupportDeskError):
    """A unique key is already taken."""

    status_code = 409
    code = "CONFLICT"
    public_message = "Resource already exists"


class BadRequest(SupportDeskError):
    """The caller sent a request that can never succeed as written."""

    status_code = 400
    code = "BAD_REQUEST"
    public_message = "Bad request"


class Unauthorized(SupportDeskError):
    """Bad credentials or an unusable token."""

    status_code = 401
    code = "UNAUTHORIZED"
    public_message = "Unauthorized"


class TokenInvalid(Unauthorized):
    """Token is malformed, carries a bad signature or lacks required claims."""

    code = "TOKEN_INVALID"


class TokenExpired(Unauthorized):
    """Token signature is fine but its expiry has passed."""

    code = "TOKEN_EXPIRED"


class PersistenceError(SupportDeskError):
    """Opaque store-level failure."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, operation: str, entity: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.entity = entity
        self.cause = cause
        super().__init__(f"{operation} on {entity} failed: {cause}")


class CredentialFormatError(SupportDeskError):
    """A stored password hash record could not be parsed."""

    status_code = 500
    code = "INTERNAL_ERROR"


class SinkError(SupportDeskError):
    """Notification delivery failed. Always absorbed by the dispatcher."""

    code = "SINK_ERROR"
