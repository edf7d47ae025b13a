"""SQLAlchemy models only; no business logic."""
from snacksmart.models.base import MAX_INTEGER_ID, CreatedAtMixin, IntegerPrimaryKeyMixin, TimestampMixin
from snacksmart.models.cart_item import CartItem
from snacksmart.models.coupon import Coupon, CouponType
from snacksmart.models.product import Product, ProductStatus
from snacksmart.models.user import User
from snacksmart.models.user_preference import ActionType, UserPreference

__all__ = [
    "ActionType",
    "CartItem",
    "Coupon",
    "CouponType",
    "CreatedAtMixin",
    "IntegerPrimaryKeyMixin",
    "MAX_INTEGER_ID",
    "Product",
    "ProductStatus",
    "TimestampMixin",
    "User",
    "UserPreference",
]
