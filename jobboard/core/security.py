"""
Security utilities for JWT authentication.

Tokens are HS256-signed and carry the username (sub) and the admin flag.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from jobboard.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenUser:
    """Identity decoded from a bearer token."""
    username: str
    is_admin: bool = False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Dictionary containing claims to encode (typically {"sub": username, "is_admin": bool})
        expires_delta: Optional expiration time delta (default: ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT token as a string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_user_token(username: str, is_admin: bool = False) -> str:
    """Create an access token for a user."""
    return create_access_token({"sub": username, "is_admin": is_admin})


def decode_token(token: str) -> dict:
    """
    Decode and validate a JWT token.

    Raises:
        JWTError: If token is invalid or expired
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])


def verify_token(token: str) -> Optional[TokenUser]:
    """
    Verify a bearer token and return the identity it carries.

    Returns:
        TokenUser, or None if the token is invalid, expired or has no subject
    """
    try:
        payload = decode_token(token)
    except JWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        return None

    username = payload.get("sub")
    if not username:
        return None

    return TokenUser(username=username, is_admin=payload.get("is_admin") is True)
