"""Product repository: catalog reads."""
from __future__ import annotations

from typing import Iterable

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from snacksmart.models import Product, ProductStatus

SORTABLE_COLUMNS = {
    "name": Product.name,
    "price": Product.price,
}


def get_product(db: Session, product_id: int) -> Product | None:
    return db.get(Product, product_id)


def list_active_products(
    db: Session,
    search: str | None = None,
    sort_by: str | None = None,
    sort_order: str = "asc",
) -> list[Product]:
    """
    Active products, optionally filtered by a case-insensitive substring of
    name, description or category. Default order is newest first.
    """
    stmt = select(Product).where(Product.status == ProductStatus.ACTIVE.value)
    term = (search or "").strip()
    if term:
        stmt = stmt.where(
            or_(
                Product.name.icontains(term, autoescape=True),
                Product.description.icontains(term, autoescape=True),
                Product.category.icontains(term, autoescape=True),
            )
        )
    column = SORTABLE_COLUMNS.get(sort_by or "")
    if column is not None:
        ordered = column.desc() if sort_order == "desc" else column.asc()
        stmt = stmt.order_by(ordered, Product.id.asc())
    else:
        stmt = stmt.order_by(Product.created_at.desc(), Product.id.desc())
    return list(db.execute(stmt).scalars().all())


def find_recommended(
    db: Session,
    categories: Iterable[str],
    exclude_ids: Iterable[int],
    limit: int,
) -> list[Product]:
    """
    Active products in any of `categories` (no category filter when empty),
    excluding `exclude_ids`, newest created first.
    """
    categories = list(categories)
    exclude_ids = list(exclude_ids)
    stmt = select(Product).where(Product.status == ProductStatus.ACTIVE.value)
    if exclude_ids:
        stmt = stmt.where(Product.id.not_in(exclude_ids))
    if categories:
        stmt = stmt.where(Product.category.in_(categories))
    stmt = stmt.order_by(Product.created_at.desc(), Product.id.desc()).limit(limit)
    return list(db.execute(stmt).scalars().all())
