"""
Authentication utilities - JWT token handling and password hashing.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from ..config import settings
from ..models import TokenData


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """Hash a password."""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def create_access_token(
    user_id: str,
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        user_id: Subject of the token
        expires_delta: Optional expiration time delta
        secret_key: Signing key (defaults to settings.secret_key)
        algorithm: Signing algorithm (defaults to settings.algorithm)

    Returns:
        str: Encoded JWT token carrying ``sub``, ``jti`` and ``exp``
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode = {"sub": user_id, "jti": uuid.uuid4().hex, "exp": expire}
    return jwt.encode(
        to_encode,
        secret_key or settings.secret_key,
        algorithm=algorithm or settings.algorithm,
    )


def decode_access_token(
    token: str,
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> Optional[TokenData]:
    """
    Decode and verify a JWT access token.

    Returns:
        Optional[TokenData]: Token data if valid and unexpired, None otherwise
    """
    try:
        payload = jwt.decode(
            token,
            secret_key or settings.secret_key,
            algorithms=[algorithm or settings.algorithm],
        )
    except JWTError:
        return None

    user_id = payload.get("sub")
    if user_id is None:
        return None

    exp = payload.get("exp")
    return TokenData(
        user_id=user_id,
        jti=payload.get("jti"),
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None,
    )

