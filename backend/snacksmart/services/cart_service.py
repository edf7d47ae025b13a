"""Cart operations for an authenticated user; stock is checked on every change."""
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.orm import Session

from snacksmart.core.errors import InvalidInputError, NotFoundError
from snacksmart.models import Product
from snacksmart.repositories import add_cart_item, clear_cart, get_cart_item, get_product, list_cart
from snacksmart.repositories.serializers import cart_item_to_dict


def _require_product(db: Session, product_id: Optional[int]) -> Product:
    if not product_id:
        raise InvalidInputError("Product ID is required")
    product = get_product(db, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


def _check_stock(product: Product, quantity: int) -> None:
    if product.stock < quantity:
        raise InvalidInputError("Insufficient stock")


def get_cart(db: Session, user_id: int) -> list[dict[str, Any]]:
    return [cart_item_to_dict(item) for item in list_cart(db, user_id)]


def add_to_cart(db: Session, user_id: int, product_id: Optional[int], quantity: int = 1) -> dict[str, Any]:
    """Add a line, or increment the existing one."""
    if quantity < 1:
        raise InvalidInputError("Quantity must be at least 1")
    product = _require_product(db, product_id)
    _check_stock(product, quantity)

    item = get_cart_item(db, user_id, product.id)
    if item is None:
        item = add_cart_item(db, user_id, product.id, quantity)
    else:
        _check_stock(product, item.quantity + quantity)
        item.quantity += quantity
        db.flush()
    return cart_item_to_dict(item)


def update_quantity(db: Session, user_id: int, product_id: Optional[int], quantity: Optional[int]) -> dict[str, Any]:
    if not product_id or quantity is None:
        raise InvalidInputError("Product ID and quantity are required")
    if quantity < 1:
        raise InvalidInputError("Quantity must be at least 1")
    product = _require_product(db, product_id)
    _check_stock(product, quantity)

    item = get_cart_item(db, user_id, product.id)
    if item is None:
        raise NotFoundError("Cart item not found")
    item.quantity = quantity
    db.flush()
    return cart_item_to_dict(item)


def remove_from_cart(db: Session, user_id: int, product_id: int) -> None:
    item = get_cart_item(db, user_id, product_id)
    if item is None:
        raise NotFoundError("Cart item not found")
    db.delete(item)


def empty_cart(db: Session, user_id: int) -> int:
    return clear_cart(db, user_id)
