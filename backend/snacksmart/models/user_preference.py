"""Tracked product interaction, scoped to a user XOR a guest session."""
from __future__ import annotations

import enum

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snacksmart.db.session import Base
from snacksmart.models.base import CreatedAtMixin, IntegerPrimaryKeyMixin


class ActionType(str, enum.Enum):
    SEARCH = "search"
    CLICK = "click"
    VIEW = "view"


class UserPreference(Base, IntegerPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "user_preferences"

    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
    )
    session_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    action_type: Mapped[str] = mapped_column(String(16), nullable=False)
    # Copy of the product's category at write time
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)

    user: Mapped["User | None"] = relationship("User", back_populates="preferences")
    product: Mapped["Product"] = relationship("Product", back_populates="preferences")

    __table_args__ = (
        CheckConstraint(
            "(user_id IS NULL) <> (session_id IS NULL)",
            name="ck_user_preferences_one_identity",
        ),
        Index("ix_user_preferences_user_created", "user_id", "created_at"),
        Index("ix_user_preferences_session_created", "session_id", "created_at"),
    )
