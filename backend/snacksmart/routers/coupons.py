"""Thin API layer: public coupon validation for checkout."""
from __future__ import annotations

from fastapi import APIRouter

from snacksmart.db.session import get_db
from snacksmart.services.coupon_service import validate_coupon

router = APIRouter(prefix="/coupons", tags=["coupons"])


@router.get("/validate/{code}")
def validate(code: str):
    with get_db() as db:
        coupon = validate_coupon(db, code)
    return {"message": "Coupon is valid", "coupon": coupon}
