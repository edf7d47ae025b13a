#!/usr/bin/env python3
"""
End-to-end check of the preference pipeline against a live database.

Run from the backend directory after migrations:
  python scripts/check_preferences_pipeline.py

Creates its own products and guest sessions (prefixed, random suffix),
asserts the bounded-history and recommendation rules, then removes them.
"""
from __future__ import annotations

import os
import sys
import uuid
from decimal import Decimal

# Ensure backend is on path so snacksmart is importable (whether run as script or from repo root)
_script_dir = os.path.dirname(os.path.abspath(__file__))
_backend = os.path.dirname(_script_dir)
if _backend not in sys.path:
    sys.path.insert(0, _backend)

from sqlalchemy import delete, select
from sqlalchemy.exc import OperationalError

from snacksmart.core.config import get_settings
from snacksmart.core.identity import from_parts
from snacksmart.db.session import get_db
from snacksmart.models import Product, ProductStatus
from snacksmart.repositories import count_preferences
from snacksmart.services.preference_service import (
    clear_preferences,
    get_recent_preferences,
    get_recommendations,
    track_interaction,
)

TEST_PREFIX = "test-e2e-"


def _check_db() -> None:
    """Fail fast with a clear message if the database is not reachable."""
    try:
        with get_db() as db:
            db.execute(select(1))
    except OperationalError as e:
        print(
            "[FAIL] Cannot connect to the database.\n"
            "  1. Set DATABASE_URL in backend/.env.\n"
            "  2. Run migrations: python scripts/run_migrations.py\n"
            "  3. Run this script again.",
            file=sys.stderr,
        )
        raise SystemExit(1) from e


def _run() -> None:
    _check_db()
    settings = get_settings()
    limit = settings.preference_history_limit
    uid = str(uuid.uuid4())[:8]
    guest = from_parts(None, f"{TEST_PREFIX}guest-{uid}")
    other = from_parts(None, f"{TEST_PREFIX}other-{uid}")
    category = f"{TEST_PREFIX}cat-{uid}"

    # --- a) Create products: many in one category, one inactive ---
    with get_db() as db:
        products = [
            Product(
                name=f"{TEST_PREFIX}product-{uid}-{i}",
                category=category,
                price=Decimal("1.00"),
                stock=10,
                status=ProductStatus.ACTIVE.value,
            )
            for i in range(limit + 5)
        ]
        inactive = Product(
            name=f"{TEST_PREFIX}inactive-{uid}",
            category=category,
            price=Decimal("1.00"),
            stock=0,
            status=ProductStatus.INACTIVE.value,
        )
        db.add_all(products + [inactive])
        db.flush()
        product_ids = [p.id for p in products]
        inactive_id = inactive.id

    try:
        # --- b) Track more than the limit; history stays bounded ---
        for pid in product_ids:
            with get_db() as db:
                track_interaction(db, guest, pid, "view")
        with get_db() as db:
            stored = count_preferences(db, guest)
        assert stored == limit, f"Expected {limit} rows after overflow; got {stored}"
        print("[PASS] Bounded history: oldest rows evicted")

        # --- c) Inactive products never surface in recent products ---
        with get_db() as db:
            track_interaction(db, guest, inactive_id, "click")
            recent = get_recent_preferences(db, guest)
        recent_ids = [p["id"] for p in recent["products"]]
        assert inactive_id not in recent_ids, f"Inactive product leaked into recent: {recent_ids}"
        assert len(recent_ids) <= settings.recent_products_limit
        print("[PASS] Recent preferences: inactive excluded, capped")

        # --- d) Recommendations exclude everything in the recent history ---
        with get_db() as db:
            track_interaction(db, other, product_ids[0], "view")
            recs = get_recommendations(db, other)
        rec_ids = [r["id"] for r in recs]
        assert product_ids[0] not in rec_ids, "Viewed product must not be recommended"
        assert inactive_id not in rec_ids, "Inactive product must not be recommended"
        assert all(r["category"] == category for r in recs), f"Unexpected categories: {recs}"
        assert len(recs) <= settings.recommendation_limit
        print("[PASS] Recommendations: preferred category, unviewed, active, capped")

        # --- e) Clearing one identity leaves the other untouched ---
        with get_db() as db:
            clear_preferences(db, guest)
        with get_db() as db:
            assert count_preferences(db, guest) == 0
            assert count_preferences(db, other) == 1
        print("[PASS] Clear preferences: scoped to one identity")
    finally:
        with get_db() as db:
            clear_preferences(db, other)
            clear_preferences(db, guest)
            db.execute(delete(Product).where(Product.id.in_(product_ids + [inactive_id])))

    print("\nAll assertions passed.")


def main() -> int:
    try:
        _run()
        return 0
    except Exception as e:
        print(f"\n[FAIL] {e}", file=sys.stderr)
        raise


if __name__ == "__main__":
    sys.exit(main())
