"""
Preference tracking and recommendation.

Every identity keeps a bounded interaction history (newest N rows, oldest
evicted first). Recommendations and the preference-biased catalog order are
derived from that history:

- viewed ids: product ids appearing in the recent history
- preferred categories: distinct non-null categories in the recent history

Recommendations are active products in a preferred category that were not
viewed. The catalog sort puts viewed products first, then preferred-category
products, and otherwise keeps the incoming order.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, TypeVar

from sqlalchemy.orm import Session

from snacksmart.core.config import get_settings
from snacksmart.core.errors import InvalidInputError, NotFoundError
from snacksmart.core.identity import Identity
from snacksmart.core.logger import Logger
from snacksmart.models import ActionType, UserPreference
from snacksmart.repositories import (
    delete_preferences,
    find_recommended,
    get_product,
    insert_preference,
    recent_preferences,
    trim_history,
)
from snacksmart.repositories.serializers import (
    PRODUCT_PREFERENCE_FIELDS,
    PRODUCT_RECOMMENDATION_FIELDS,
    preference_to_dict,
    product_to_dict,
)

_logger = Logger(name="snacksmart.preferences")

VALID_ACTIONS = frozenset(a.value for a in ActionType)

T = TypeVar("T")


def preference_signals(history: Iterable[UserPreference]) -> tuple[set[int], list[str]]:
    """Viewed product ids and distinct non-null categories (first-seen order)."""
    viewed: set[int] = set()
    categories: list[str] = []
    for pref in history:
        viewed.add(pref.product_id)
        if pref.category and pref.category not in categories:
            categories.append(pref.category)
    return viewed, categories


def sort_by_preference(products: Sequence[T], history: Sequence[UserPreference]) -> list[T]:
    """
    Reorder `products` (anything with `id` and `category`): viewed first, then
    preferred category. Stable, so equal-rank items keep their input order.
    """
    if not history:
        return list(products)
    viewed, categories = preference_signals(history)
    preferred = set(categories)
    return sorted(
        products,
        key=lambda p: (p.id not in viewed, p.category not in preferred),
    )


def track_interaction(
    db: Session,
    identity: Optional[Identity],
    product_id: Optional[int],
    action_type: Optional[str],
) -> dict[str, Any]:
    """
    Record one interaction and trim the identity's history to the newest N.
    Insert and trim share the caller's transaction.
    """
    if not product_id or not action_type:
        raise InvalidInputError("Product ID and action type are required")
    if action_type not in VALID_ACTIONS:
        raise InvalidInputError("Invalid action type")
    if identity is None:
        raise InvalidInputError("User must be logged in or provide session ID")

    product = get_product(db, product_id)
    if product is None:
        raise NotFoundError("Product not found")

    limit = get_settings().preference_history_limit
    pref = insert_preference(db, identity, product.id, action_type, product.category)
    evicted = trim_history(db, identity, keep=limit)
    _logger.debug(
        "tracked interaction",
        **identity.as_dict(),
        product_id=product.id,
        action_type=action_type,
        evicted=evicted,
    )
    return preference_to_dict(pref)


def get_recent_preferences(db: Session, identity: Optional[Identity]) -> dict[str, list]:
    """Raw recent rows plus up to N distinct active products, most recent first."""
    if identity is None:
        return {"preferences": [], "products": []}

    settings = get_settings()
    history = recent_preferences(db, identity, settings.preference_history_limit, with_product=True)

    products: list[dict[str, Any]] = []
    seen: set[int] = set()
    for pref in history:
        product = pref.product
        if not product.is_active or product.id in seen:
            continue
        seen.add(product.id)
        products.append(product_to_dict(product, PRODUCT_PREFERENCE_FIELDS))

    return {
        "preferences": [preference_to_dict(p, include_product=True) for p in history],
        "products": products[: settings.recent_products_limit],
    }


def get_recommendations(db: Session, identity: Optional[Identity]) -> list[dict[str, Any]]:
    """Active, unviewed products from the identity's preferred categories."""
    if identity is None:
        return []

    settings = get_settings()
    history = recent_preferences(db, identity, settings.preference_history_limit)
    if not history:
        return []

    viewed, categories = preference_signals(history)
    # No categorized history: fall back to unfiltered active products
    products = find_recommended(db, categories, viewed, settings.recommendation_limit)
    return [product_to_dict(p, PRODUCT_RECOMMENDATION_FIELDS) for p in products]


def get_history(db: Session, identity: Optional[Identity]) -> list[UserPreference]:
    if identity is None:
        return []
    return recent_preferences(db, identity, get_settings().preference_history_limit)


def clear_preferences(db: Session, identity: Optional[Identity]) -> int:
    if identity is None:
        raise InvalidInputError("User ID or session ID required")
    deleted = delete_preferences(db, identity)
    _logger.info("cleared preferences", **identity.as_dict(), deleted=deleted)
    return deleted
