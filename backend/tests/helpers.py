"""Shared fixtures for the unittest suites."""
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from snacksmart.core.security import create_access_token, hash_password
from snacksmart.db.session import create_all, drop_all, get_db
from snacksmart.models import Product, User


def reset_database() -> None:
    drop_all()
    create_all()


def add_product(
    name: str,
    category: Optional[str] = "Chips",
    status: str = "active",
    price: str = "1.00",
    stock: int = 10,
    description: Optional[str] = None,
) -> int:
    with get_db() as db:
        product = Product(
            name=name,
            description=description,
            category=category,
            price=Decimal(price),
            stock=stock,
            status=status,
        )
        db.add(product)
        db.flush()
        return product.id


def add_user(email: str = "jane@example.com", password: str = "Secret123!", confirmed: bool = True) -> int:
    with get_db() as db:
        user = User(
            first_name="Jane",
            last_name="Doe",
            email=email,
            password=hash_password(password),
            confirmed=confirmed,
        )
        db.add(user)
        db.flush()
        return user.id


def auth_header(user_id: int, email: str = "jane@example.com") -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id, email)}"}
