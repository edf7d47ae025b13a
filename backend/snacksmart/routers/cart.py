"""Thin API layer: the authenticated user's cart."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, ConfigDict, Field

from snacksmart.core.security import get_required_user_id
from snacksmart.db.session import get_db
from snacksmart.models import MAX_INTEGER_ID
from snacksmart.services import cart_service

router = APIRouter(prefix="/cart", tags=["cart"])


class AddToCartRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: Optional[int] = Field(None, alias="productId", ge=1, le=MAX_INTEGER_ID)
    quantity: int = 1


class UpdateCartRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: Optional[int] = Field(None, alias="productId", ge=1, le=MAX_INTEGER_ID)
    quantity: Optional[int] = None


@router.get("")
def get_cart(user_id: int = Depends(get_required_user_id)):
    with get_db() as db:
        return {"ok": True, "data": cart_service.get_cart(db, user_id)}


@router.post("")
def add_to_cart(body: AddToCartRequest, user_id: int = Depends(get_required_user_id)):
    with get_db() as db:
        item = cart_service.add_to_cart(db, user_id, body.product_id, body.quantity)
    return {"ok": True, "data": item}


@router.put("")
def update_cart(body: UpdateCartRequest, user_id: int = Depends(get_required_user_id)):
    with get_db() as db:
        item = cart_service.update_quantity(db, user_id, body.product_id, body.quantity)
    return {"ok": True, "data": item}


@router.delete("/{product_id}")
def remove_from_cart(
    product_id: int = Path(..., ge=1, le=MAX_INTEGER_ID),
    user_id: int = Depends(get_required_user_id),
):
    with get_db() as db:
        cart_service.remove_from_cart(db, user_id, product_id)
    return {"ok": True, "message": "Item removed from cart"}


@router.delete("")
def clear_cart(user_id: int = Depends(get_required_user_id)):
    with get_db() as db:
        cart_service.empty_cart(db, user_id)
    return {"ok": True, "message": "Cart cleared"}
