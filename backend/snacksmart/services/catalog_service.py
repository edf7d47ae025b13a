"""Catalog listing with search, column sort and preference-biased sort."""
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.orm import Session

from snacksmart.core.errors import NotFoundError
from snacksmart.core.identity import Identity
from snacksmart.core.logger import Logger
from snacksmart.repositories import get_product, list_active_products
from snacksmart.repositories.serializers import PRODUCT_FULL_FIELDS, PRODUCT_LIST_FIELDS, product_to_dict
from snacksmart.services.preference_service import get_history, sort_by_preference

_logger = Logger(name="snacksmart.catalog")

PREFERENCE_SORT = "preferences"


def list_products(
    db: Session,
    search: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: str = "asc",
    identity: Optional[Identity] = None,
) -> list[dict[str, Any]]:
    """
    Active products matching `search`. sort_by=name|price honours sort_order;
    sort_by=preferences reorders by the identity's recent history and falls
    back to newest-first when there is none.
    """
    if sort_by == PREFERENCE_SORT:
        products = list_active_products(db, search=search)
        history = get_history(db, identity)
        if history:
            products = sort_by_preference(products, history)
    else:
        products = list_active_products(db, search=search, sort_by=sort_by, sort_order=sort_order)

    _logger.debug("listed products", search=search, sort_by=sort_by, count=len(products))
    return [product_to_dict(p, PRODUCT_LIST_FIELDS) for p in products]


def get_product_detail(db: Session, product_id: int) -> dict[str, Any]:
    product = get_product(db, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product_to_dict(product, PRODUCT_FULL_FIELDS)
