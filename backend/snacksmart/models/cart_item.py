"""Cart line: one row per (user, product)."""
from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snacksmart.db.session import Base
from snacksmart.models.base import IntegerPrimaryKeyMixin, TimestampMixin


class CartItem(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "cart"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    user: Mapped["User"] = relationship("User", back_populates="cart_items")
    product: Mapped["Product"] = relationship("Product")

    __table_args__ = (UniqueConstraint("user_id", "product_id", name="uq_cart_user_product"),)
