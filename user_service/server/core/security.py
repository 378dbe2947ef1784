"""
Password hashing and the HTTP Basic authentication scheme.

Passwords are stored as bcrypt hashes produced by passlib. The work factor
comes from ``BCRYPT_ROUNDS`` so test runs can lower it.
"""

from __future__ import annotations

from passlib.context import CryptContext
from fastapi.security import HTTPBasic

from user_service.server.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

# auto_error is off so that the 401 response and its WWW-Authenticate header
# are produced by the authentication dependency in one place.
basic_auth = HTTPBasic(
    scheme_name="HTTP Basic",
    description="Username and password of a stored user account",
    auto_error=False,
)


def hash_password(password: str) -> str:
    """Hash ``password`` with bcrypt and a fresh salt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check ``plain_password`` against a stored hash.

    Malformed or unknown hashes count as a mismatch.
    """
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False
