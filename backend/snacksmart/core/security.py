"""Token signing/verification, password hashing and bearer-auth dependencies."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from snacksmart.core.config import get_settings
from snacksmart.core.errors import InvalidInputError
from snacksmart.core.logger import Logger

ACCESS_PURPOSE = "access"
EMAIL_PURPOSE = "email"

_bearer = HTTPBearer(auto_error=False)
_logger = Logger(name="snacksmart.security")


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def _sign(user_id: int, email: str, purpose: str, minutes: int) -> str:
    settings = get_settings()
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "purpose": purpose,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: int, email: str) -> str:
    """Sign an access token for a logged-in user."""
    return _sign(user_id, email, ACCESS_PURPOSE, get_settings().access_token_expire_minutes)


def create_email_token(user_id: int, email: str) -> str:
    """Sign a short-lived email confirmation token."""
    return _sign(user_id, email, EMAIL_PURPOSE, get_settings().email_token_expire_minutes)


def decode_token(token: str, purpose: str) -> dict[str, Any]:
    """
    Decode and check a signed token. Expiry is enforced by PyJWT.
    Raises InvalidInputError for anything that does not verify.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as e:
        raise InvalidInputError("Invalid or expired token") from e
    if payload.get("purpose") != purpose or not str(payload.get("sub", "")).isdigit():
        raise InvalidInputError("Invalid or expired token")
    return payload


def get_optional_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Optional[int]:
    """User id from a valid bearer token; None when absent or invalid."""
    if not credentials:
        return None
    try:
        payload = decode_token(credentials.credentials, ACCESS_PURPOSE)
    except InvalidInputError as e:
        _logger.warn("ignoring bearer token", reason=e.detail)
        return None
    return int(payload["sub"])


def get_required_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> int:
    """User id from a valid bearer token; 401 otherwise."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_token(credentials.credentials, ACCESS_PURPOSE)
    except InvalidInputError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return int(payload["sub"])
