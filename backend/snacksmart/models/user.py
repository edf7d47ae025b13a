"""Customer account."""
from __future__ import annotations

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snacksmart.db.session import Base
from snacksmart.models.base import IntegerPrimaryKeyMixin, TimestampMixin


class User(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "users"

    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)  # bcrypt hash
    confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    cart_items: Mapped[list] = relationship(
        "CartItem",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    preferences: Mapped[list] = relationship(
        "UserPreference",
        back_populates="user",
        cascade="all, delete-orphan",
    )
