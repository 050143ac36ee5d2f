"""
Password hashing and bearer tokens.

bcrypt for password hashes, PyJWT for signed access tokens.
"""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from fieldtrack.config import settings

logger = logging.getLogger(__name__)


class InvalidToken(Exception):
    """Bearer token is missing, malformed, expired or badly signed."""


def hash_password(password: str) -> str:
    """Hash a plain password with a fresh salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=10)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def create_access_token(user_id: str, role: str, expires_in: timedelta | None = None) -> str:
    """
    Issue a signed access token.

    Args:
        user_id: Subject of the token
        role: User role, copied into the payload for route guards
        expires_in: Lifetime (defaults to settings.jwt_expire_days)

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    lifetime = expires_in if expires_in is not None else timedelta(days=settings.jwt_expire_days)
    payload = {
        "sub": user_id,
        "role": role,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """
    Decode and verify an access token.

    Raises:
        InvalidToken: If the token cannot be trusted
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidToken("Token expired") from e
    except jwt.PyJWTError as e:
        logger.debug(f"Rejected bearer token: {e}")
        raise InvalidToken("Invalid token") from e
    return payload
