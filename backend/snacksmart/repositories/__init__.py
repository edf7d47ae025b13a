from snacksmart.repositories.cart_repo import add_cart_item, clear_cart, get_cart_item, list_cart
from snacksmart.repositories.coupon_repo import get_coupon_by_code
from snacksmart.repositories.preference_repo import (
    count_preferences,
    delete_preferences,
    insert_preference,
    recent_preferences,
    trim_history,
)
from snacksmart.repositories.product_repo import find_recommended, get_product, list_active_products
from snacksmart.repositories.user_repo import create_user, get_user, get_user_by_email

__all__ = [
    "add_cart_item",
    "clear_cart",
    "count_preferences",
    "create_user",
    "delete_preferences",
    "find_recommended",
    "get_cart_item",
    "get_coupon_by_code",
    "get_product",
    "get_user",
    "get_user_by_email",
    "insert_preference",
    "list_active_products",
    "list_cart",
    "recent_preferences",
    "trim_history",
]
