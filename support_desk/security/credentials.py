"""
Password hashing for Support Desk.

Passwords are hashed with argon2id using the library's default work
parameters and a fresh random salt per call. The stored record is the
standard PHC string, so algorithm, parameters, salt and hash travel together
as one opaque text value.
"""

from typing import Union

import structlog
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from ..errors import CredentialFormatError

logger = structlog.get_logger()

_hasher = PasswordHasher()


def hash_password(password: Union[str, bytes]) -> str:
    """Hash a password and return the encoded argon2 record."""
    return _hasher.hash(password)


def verify_password(password: Union[str, bytes], hash_record: str) -> bool:
    """Check a password against a stored record.

    Returns False on a mismatch. Raises CredentialFormatError when the
    stored record itself cannot be parsed. Any other argon2 failure is
    logged and propagated.
    """
    try:
        return _hasher.verify(hash_record, password)
    except VerifyMismatchError:
        return False
    except InvalidHashError as e:
        raise CredentialFormatError(f"Malformed password hash record: {e}") from e
    except VerificationError as e:
        logger.error("Password verification failed", error=str(e))
        raise
