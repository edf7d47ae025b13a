"""User repository."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from snacksmart.models import User


def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email.lower())).scalar_one_or_none()


def create_user(db: Session, first_name: str, last_name: str, email: str, password_hash: str) -> User:
    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email.lower(),
        password=password_hash,
        confirmed=False,
    )
    db.add(user)
    db.flush()
    return user
