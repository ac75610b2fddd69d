"""
Identity verification: password hashing and session tokens.
"""

from .credentials import hash_password, verify_password
from .tokens import TokenClaims, TokenService

__all__ = [
    "TokenClaims",
    "TokenService",
    "hash_password",
    "verify_password",
]
