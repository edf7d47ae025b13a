"""
Caller identity used to scope preference data.

An identity is either an authenticated user (by id) or a guest (by an opaque,
client-generated session string). Never both.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from snacksmart.core.errors import InvalidInputError


@dataclass(frozen=True)
class AuthenticatedIdentity:
    user_id: int

    def as_dict(self) -> dict:
        return {"userId": self.user_id}


@dataclass(frozen=True)
class GuestIdentity:
    session_id: str

    def as_dict(self) -> dict:
        return {"sessionId": self.session_id}


Identity = Union[AuthenticatedIdentity, GuestIdentity]


def _clean_session_id(session_id: Optional[str]) -> Optional[str]:
    if session_id is None:
        return None
    session_id = session_id.strip()
    return session_id or None


def from_parts(user_id: Optional[int], session_id: Optional[str]) -> Identity:
    """Build an identity from exactly one of user_id / session_id."""
    session_id = _clean_session_id(session_id)
    if user_id is not None and session_id is not None:
        raise InvalidInputError("Provide either a user or a session ID, not both")
    if user_id is not None:
        return AuthenticatedIdentity(user_id=user_id)
    if session_id is not None:
        return GuestIdentity(session_id=session_id)
    raise InvalidInputError("User must be logged in or provide session ID")


def resolve(user_id: Optional[int], session_id: Optional[str]) -> Optional[Identity]:
    """
    Per-request resolution: an authenticated user wins and any session id is
    ignored; otherwise fall back to the guest session. None when neither.
    """
    if user_id is not None:
        return AuthenticatedIdentity(user_id=user_id)
    session_id = _clean_session_id(session_id)
    if session_id is not None:
        return GuestIdentity(session_id=session_id)
    return None
