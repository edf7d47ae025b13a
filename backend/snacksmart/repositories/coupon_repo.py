"""Coupon repository: read-only lookups for checkout."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from snacksmart.models import Coupon


def get_coupon_by_code(db: Session, code: str) -> Coupon | None:
    return db.execute(select(Coupon).where(Coupon.code == code.upper())).scalar_one_or_none()
