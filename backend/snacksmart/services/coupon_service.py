"""Checkout-time coupon validation."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.orm import Session

from snacksmart.core.errors import InvalidInputError, NotFoundError
from snacksmart.repositories import get_coupon_by_code
from snacksmart.repositories.serializers import coupon_summary


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def validate_coupon(db: Session, code: str, now: Optional[datetime] = None) -> dict[str, Any]:
    coupon = get_coupon_by_code(db, code)
    if coupon is None:
        raise NotFoundError("Invalid coupon code")
    if not coupon.is_active:
        raise InvalidInputError("This coupon is no longer active")

    now = now or datetime.now(timezone.utc)
    if now < _aware(coupon.valid_from):
        raise InvalidInputError("This coupon is not yet valid")
    if now > _aware(coupon.valid_to):
        raise InvalidInputError("This coupon has expired")
    return coupon_summary(coupon)
