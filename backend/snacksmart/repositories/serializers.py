"""Row -> JSON-ready dict shaping shared by repositories and services."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable

from snacksmart.models import CartItem, Coupon, Product, User, UserPreference

# Field sets exposed per use site (camelCase keys are the public API)
PRODUCT_FULL_FIELDS = (
    "id", "name", "description", "category", "price", "stock", "status", "image", "createdAt", "updatedAt",
)
PRODUCT_LIST_FIELDS = ("id", "name", "description", "category", "price", "image", "createdAt")
PRODUCT_PREFERENCE_FIELDS = ("id", "name", "category", "price", "image", "status")
PRODUCT_RECOMMENDATION_FIELDS = ("id", "name", "category", "price", "image", "description")


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _money(value: Decimal | float | None) -> float | None:
    return float(value) if value is not None else None


def product_to_dict(product: Product, fields: Iterable[str] = PRODUCT_FULL_FIELDS) -> dict[str, Any]:
    full = {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "category": product.category,
        "price": _money(product.price),
        "stock": product.stock,
        "status": product.status,
        "image": product.image,
        "createdAt": _iso(product.created_at),
        "updatedAt": _iso(product.updated_at),
    }
    return {k: full[k] for k in fields}


def preference_to_dict(pref: UserPreference, include_product: bool = False) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": pref.id,
        "userId": pref.user_id,
        "sessionId": pref.session_id,
        "productId": pref.product_id,
        "actionType": pref.action_type,
        "category": pref.category,
        "createdAt": _iso(pref.created_at),
    }
    if include_product:
        out["product"] = product_to_dict(pref.product, PRODUCT_PREFERENCE_FIELDS)
    return out


def cart_item_to_dict(item: CartItem) -> dict[str, Any]:
    """Flattened cart line: cart columns plus the product's display fields."""
    product = item.product
    return {
        "id": item.id,
        "userId": item.user_id,
        "productId": item.product_id,
        "quantity": item.quantity,
        "name": product.name,
        "description": product.description,
        "price": _money(product.price),
        "image": product.image,
        "stock": product.stock,
        "category": product.category,
        "createdAt": _iso(item.created_at),
    }


def user_to_dict(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "email": user.email,
    }


def coupon_summary(coupon: Coupon) -> dict[str, Any]:
    return {"code": coupon.code, "type": coupon.type, "value": _money(coupon.value)}
