# fintrack/services/security.py
"""Password hashing + JWT helpers.

Passwords are hashed with passlib pbkdf2_sha256 (pure-python, no native backend).
Access tokens are HS256 JWTs from python-jose carrying the user id as 'sub'.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Union, Dict, Any
from passlib.context import CryptContext
from jose import jwt, JWTError
from fintrack.core.config import settings

pwd_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    """Hash a plaintext password (never store plaintext)."""
    if password is None:
        raise ValueError("password cannot be None")
    return pwd_ctx.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify plain password against hashed. Returns False on any error."""
    if plain is None or hashed is None:
        return False
    try:
        return pwd_ctx.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


def create_access_token(
    subject: Union[str, int],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a JWT access token with subject (user id usually).
    - subject is stored under 'sub' as a string
    - 'iat' and 'exp' included (exp as int timestamp)
    """
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload: Dict[str, Any] = {
        "sub": str(subject),
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT. Raises JWTError on invalid or expired tokens.
    Returns the payload dict (contains 'sub', 'exp', etc).
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])


__all__ = ["hash_password", "verify_password", "create_access_token", "decode_access_token", "JWTError"]
