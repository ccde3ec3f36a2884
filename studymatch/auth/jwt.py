"""Bearer tokens for API and WebSocket authentication."""
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from studymatch.config import settings


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Encode a token whose 'sub' is the user id (as a string, per JWT)."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    claims = {"sub": str(user_id), "exp": expire}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any] | None:
    """Return the token's claims, or None if it is malformed, forged or expired."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def user_id_from_token(token: str | None) -> int | None:
    if not token:
        return None
    payload = decode_token(token)
    if not payload:
        return None
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None
