"""Catalog product. The preference subsystem only reads id/category/status."""
from __future__ import annotations

import enum
from decimal import Decimal

from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snacksmart.db.session import Base
from snacksmart.models.base import IntegerPrimaryKeyMixin, TimestampMixin


class ProductStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Product(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=ProductStatus.ACTIVE.value)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    preferences: Mapped[list] = relationship(
        "UserPreference",
        back_populates="product",
        cascade="all, delete-orphan",
    )

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE.value
