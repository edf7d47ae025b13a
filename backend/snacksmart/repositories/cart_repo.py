"""Cart repository: one line per (user, product)."""
from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from snacksmart.models import CartItem


def list_cart(db: Session, user_id: int) -> list[CartItem]:
    return list(
        db.execute(
            select(CartItem)
            .where(CartItem.user_id == user_id)
            .options(selectinload(CartItem.product))
            .order_by(CartItem.created_at.desc(), CartItem.id.desc())
        ).scalars().all()
    )


def get_cart_item(db: Session, user_id: int, product_id: int) -> CartItem | None:
    return db.execute(
        select(CartItem).where(CartItem.user_id == user_id, CartItem.product_id == product_id)
    ).scalar_one_or_none()


def add_cart_item(db: Session, user_id: int, product_id: int, quantity: int) -> CartItem:
    item = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
    db.add(item)
    db.flush()
    db.refresh(item)
    return item


def clear_cart(db: Session, user_id: int) -> int:
    result = db.execute(
        delete(CartItem)
        .where(CartItem.user_id == user_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount or 0
