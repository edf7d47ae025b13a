"""
Registration, email confirmation and login.
Mail delivery is not wired up: the confirmation link is logged instead.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from snacksmart.core.config import get_settings
from snacksmart.core.errors import AuthError, ConflictError, ForbiddenError, NotFoundError
from snacksmart.core.logger import Logger
from snacksmart.core.security import (
    EMAIL_PURPOSE,
    create_access_token,
    create_email_token,
    decode_token,
    hash_password,
    verify_password,
)
from snacksmart.repositories import create_user, get_user, get_user_by_email
from snacksmart.repositories.serializers import user_to_dict

_logger = Logger(name="snacksmart.accounts")


def register_user(db: Session, first_name: str, last_name: str, email: str, password: str) -> str:
    """Create an unconfirmed user; returns the confirmation link."""
    if get_user_by_email(db, email) is not None:
        raise ConflictError("This email is already in use.")

    user = create_user(db, first_name, last_name, email, hash_password(password))
    token = create_email_token(user.id, user.email)
    confirm_url = f"{get_settings().frontend_origin}/confirm?token={token}"
    _logger.info("registered user; confirmation pending", user_id=user.id, confirm_url=confirm_url)
    return confirm_url


def confirm_email(db: Session, token: str) -> None:
    payload = decode_token(token, EMAIL_PURPOSE)
    user = get_user(db, int(payload["sub"]))
    if user is None:
        raise NotFoundError("User not found")
    user.confirmed = True


def login(db: Session, email: str, password: str) -> dict[str, Any]:
    user = get_user_by_email(db, email)
    if user is None or not user.is_active:
        raise AuthError("Invalid email or password.")
    if not user.confirmed:
        raise ForbiddenError("Please confirm your email before logging in.")
    if not verify_password(password, user.password):
        raise AuthError("Invalid email or password.")

    return {
        "message": "Login successful",
        "token": create_access_token(user.id, user.email),
        "user": user_to_dict(user),
    }
