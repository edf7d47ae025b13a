"""Thin API layer: catalog listing and product detail."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from snacksmart.core import identity as identities
from snacksmart.core.security import get_optional_user_id
from snacksmart.db.session import get_db
from snacksmart.models import MAX_INTEGER_ID
from snacksmart.services import catalog_service

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
def list_products(
    search: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder"),
    session_id: Optional[str] = Query(None, alias="sessionId"),
    user_id: Optional[int] = Depends(get_optional_user_id),
):
    """
    Active products. sortBy=preferences orders by the caller's recent history
    (bearer token, else sessionId).
    """
    identity = identities.resolve(user_id, session_id)
    with get_db() as db:
        return catalog_service.list_products(
            db,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
            identity=identity,
        )


@router.get("/{product_id}")
def get_product(product_id: int = Path(..., ge=1, le=MAX_INTEGER_ID)):
    with get_db() as db:
        return catalog_service.get_product_detail(db, product_id)
