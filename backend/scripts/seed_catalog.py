#!/usr/bin/env python3
"""
Load a demo catalog, one coupon and one confirmed customer.

Run from the backend directory after migrations (or against SQLite, where the
tables are created here):
  python scripts/seed_catalog.py
Skips seeding when products already exist.
"""
from __future__ import annotations

import os
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal

_script_dir = os.path.dirname(os.path.abspath(__file__))
_backend = os.path.dirname(_script_dir)
if _backend not in sys.path:
    sys.path.insert(0, _backend)

from sqlalchemy import func, select

from snacksmart.core.config import get_settings
from snacksmart.core.logger import Logger
from snacksmart.core.security import hash_password
from snacksmart.db.session import create_all, get_db
from snacksmart.models import Coupon, CouponType, Product, ProductStatus, User

_logger = Logger(name="snacksmart.seed")

# (name, description, category, price, stock)
PRODUCTS = [
    ("Trail Mix - Superfood", "Nuts, seeds, and goji berries mix", "Mix", "8.49", 120),
    ("Sweet Potato Chips", "Baked sweet potato chips with sea salt", "Chips", "4.79", 250),
    ("Seaweed Snacks", "Roasted seaweed sheets with sesame", "Seaweed", "2.99", 80),
    ("Rice Cakes - Whole Grain", "Lightly salted whole grain rice cakes", "Cakes", "3.29", 150),
    ("Quinoa Chips", "Baked quinoa chips with sea salt", "Chips", "4.49", 200),
    ("Apple Chips", "Crispy baked apple chips, no sugar added", "Dried Fruit", "3.99", 30),
    ("Chickpea Puffs", "Crunchy roasted chickpea snack", "Chips", "3.49", 156),
    ("Kale Chips", "Organic baked kale chips with olive oil", "Chips", "5.99", 89),
    ("Pumpkin Seeds", "Roasted and lightly salted", "Seeds", "5.49", 342),
    ("Dark Chocolate Bar", "85% cacao dark chocolate", "Chocolate", "3.99", 298),
]

DISCONTINUED = [
    ("Beet Chips", "Thin-sliced beet chips", "Chips", "4.29", 0),
]


def _product(row: tuple, status: ProductStatus) -> Product:
    name, description, category, price, stock = row
    return Product(
        name=name,
        description=description,
        category=category,
        price=Decimal(price),
        stock=stock,
        status=status.value,
    )


def main() -> int:
    if get_settings().is_sqlite:
        create_all()

    with get_db() as db:
        existing = db.execute(select(func.count()).select_from(Product)).scalar_one()
        if existing:
            _logger.info("catalog already seeded; skipping", products=existing)
            return 0

        for row in PRODUCTS:
            db.add(_product(row, ProductStatus.ACTIVE))
        for row in DISCONTINUED:
            db.add(_product(row, ProductStatus.INACTIVE))

        now = datetime.now(timezone.utc)
        db.add(
            Coupon(
                code="SNACK10",
                type=CouponType.PERCENTAGE.value,
                value=Decimal("10"),
                valid_from=now - timedelta(days=1),
                valid_to=now + timedelta(days=90),
                is_active=True,
            )
        )
        db.add(
            User(
                first_name="John",
                last_name="Doe",
                email="john@example.com",
                password=hash_password("User123!"),
                confirmed=True,
            )
        )

    _logger.info("seeded catalog", products=len(PRODUCTS) + len(DISCONTINUED))
    return 0


if __name__ == "__main__":
    sys.exit(main())
