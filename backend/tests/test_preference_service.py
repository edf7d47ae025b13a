"""
Tests for preference tracking, bounded history and recommendation derivation.
"""
import unittest
from types import SimpleNamespace

from sqlalchemy import Text
from sqlalchemy.exc import IntegrityError

from snacksmart.core.errors import InvalidInputError, NotFoundError
from snacksmart.core.identity import AuthenticatedIdentity, GuestIdentity
from snacksmart.db.session import get_db
from snacksmart.models import UserPreference
from snacksmart.repositories import count_preferences, recent_preferences
from snacksmart.services import preference_service
from tests.helpers import add_product, add_user, reset_database


def _track(ident, product_id, action="view"):
    with get_db() as db:
        return preference_service.track_interaction(db, ident, product_id, action)


def _count(ident):
    with get_db() as db:
        return count_preferences(db, ident)


class TestTrackInteraction(unittest.TestCase):
    """Tests for recording interactions."""

    def setUp(self):
        reset_database()
        self.guest = GuestIdentity("guest_abc")

    def test_records_category_at_write_time(self):
        pid = add_product("Kale Chips", category="Chips")
        pref = _track(self.guest, pid)
        self.assertEqual(pref["productId"], pid)
        self.assertEqual(pref["category"], "Chips")
        self.assertEqual(pref["sessionId"], "guest_abc")
        self.assertIsNone(pref["userId"])
        self.assertEqual(pref["actionType"], "view")
        self.assertIsNotNone(pref["createdAt"])

    def test_authenticated_row_has_no_session(self):
        uid = add_user()
        pid = add_product("Kale Chips")
        pref = _track(AuthenticatedIdentity(uid), pid, "click")
        self.assertEqual(pref["userId"], uid)
        self.assertIsNone(pref["sessionId"])

    def test_long_session_id_is_stored_whole(self):
        pid = add_product("Kale Chips")
        guest = GuestIdentity("g" * 1000)
        pref = _track(guest, pid)
        self.assertEqual(pref["sessionId"], "g" * 1000)
        self.assertEqual(_count(guest), 1)
        self.assertIsInstance(UserPreference.__table__.c.session_id.type, Text)

    def test_row_needs_exactly_one_identity(self):
        uid = add_user()
        pid = add_product("Kale Chips")
        for user_id, session_id in ((uid, "guest_abc"), (None, None)):
            with self.subTest(user_id=user_id, session_id=session_id):
                with self.assertRaises(IntegrityError):
                    with get_db() as db:
                        db.add(
                            UserPreference(
                                user_id=user_id,
                                session_id=session_id,
                                product_id=pid,
                                action_type="view",
                            )
                        )
                        db.flush()
        self.assertEqual(_count(AuthenticatedIdentity(uid)), 0)

    def test_history_is_bounded_oldest_first(self):
        pids = [add_product(f"Product {i}") for i in range(25)]
        for pid in pids:
            _track(self.guest, pid)
        self.assertEqual(_count(self.guest), 20)

        with get_db() as db:
            kept = [p.product_id for p in recent_preferences(db, self.guest, 100)]
        self.assertEqual(kept, list(reversed(pids[5:])))

    def test_bound_is_per_identity(self):
        other = GuestIdentity("guest_other")
        pid = add_product("Seaweed Snacks", category="Seaweed")
        _track(other, pid)
        for _ in range(22):
            _track(self.guest, pid)
        self.assertEqual(_count(self.guest), 20)
        self.assertEqual(_count(other), 1)

    def test_missing_fields_rejected(self):
        pid = add_product("Kale Chips")
        with self.assertRaises(InvalidInputError):
            _track(self.guest, None)
        with self.assertRaises(InvalidInputError):
            _track(self.guest, pid, None)

    def test_unknown_action_rejected(self):
        pid = add_product("Kale Chips")
        with self.assertRaises(InvalidInputError):
            _track(self.guest, pid, "purchase")

    def test_missing_identity_rejected(self):
        pid = add_product("Kale Chips")
        with self.assertRaises(InvalidInputError):
            _track(None, pid)

    def test_unknown_product_writes_nothing(self):
        with self.assertRaises(NotFoundError):
            _track(self.guest, 9999)
        self.assertEqual(_count(self.guest), 0)


class TestRecentPreferences(unittest.TestCase):
    """Tests for recent preference retrieval."""

    def setUp(self):
        reset_database()
        self.guest = GuestIdentity("guest_recent")

    def _recent(self, ident):
        with get_db() as db:
            return preference_service.get_recent_preferences(db, ident)

    def test_anonymous_gets_empty_result(self):
        self.assertEqual(self._recent(None), {"preferences": [], "products": []})

    def test_no_history_gets_empty_result(self):
        self.assertEqual(self._recent(self.guest), {"preferences": [], "products": []})

    def test_dedupes_filters_inactive_and_caps(self):
        a = add_product("A")
        b = add_product("B", status="inactive")
        c, d, e, f = (add_product(n) for n in "CDEF")
        for pid in (a, b, a, c, d, e, f):
            _track(self.guest, pid)

        result = self._recent(self.guest)
        self.assertEqual(len(result["preferences"]), 7)
        self.assertEqual(result["preferences"][0]["product"]["id"], f)
        self.assertEqual([p["id"] for p in result["products"]], [f, e, d, c])

    def test_inactive_only_history(self):
        b = add_product("B", status="inactive")
        _track(self.guest, b)
        result = self._recent(self.guest)
        self.assertEqual(len(result["preferences"]), 1)
        self.assertEqual(result["products"], [])

    def test_dedup_keeps_most_recent_position(self):
        a, c = add_product("A"), add_product("C")
        for pid in (a, c, a):
            _track(self.guest, pid)
        self.assertEqual([p["id"] for p in self._recent(self.guest)["products"]], [a, c])


class TestRecommendations(unittest.TestCase):
    """Tests for category-based recommendations."""

    def setUp(self):
        reset_database()
        self.guest = GuestIdentity("session_1")

    def _recs(self, ident):
        with get_db() as db:
            return preference_service.get_recommendations(db, ident)

    def test_anonymous_and_empty_history(self):
        add_product("Kale Chips")
        self.assertEqual(self._recs(None), [])
        self.assertEqual(self._recs(self.guest), [])

    def test_same_category_unviewed_active_capped(self):
        chips = [add_product(f"Chips {i}", category="Chips") for i in range(12)]
        add_product("Stale Chips", category="Chips", status="inactive")
        add_product("Dark Chocolate Bar", category="Chocolate")
        _track(self.guest, chips[0])

        recs = self._recs(self.guest)
        self.assertEqual(len(recs), 10)
        ids = [r["id"] for r in recs]
        self.assertNotIn(chips[0], ids)
        self.assertTrue(all(r["category"] == "Chips" for r in recs))
        # Newest created first
        self.assertEqual(ids, sorted(chips[1:], reverse=True)[:10])
        self.assertEqual(
            set(recs[0].keys()), {"id", "name", "category", "price", "image", "description"}
        )

    def test_excludes_every_viewed_product(self):
        chips = [add_product(f"Chips {i}", category="Chips") for i in range(4)]
        seeds = add_product("Pumpkin Seeds", category="Seeds")
        for pid in chips[:3]:
            _track(self.guest, pid)
        ids = [r["id"] for r in self._recs(self.guest)]
        self.assertEqual(ids, [chips[3]])
        self.assertNotIn(seeds, ids)

    def test_uncategorized_history_falls_back_to_all_active(self):
        plain = add_product("Mystery Snack", category=None)
        chips = add_product("Kale Chips", category="Chips")
        add_product("Old Chips", category="Chips", status="inactive")
        _track(self.guest, plain)
        self.assertEqual([r["id"] for r in self._recs(self.guest)], [chips])


class TestSortByPreference(unittest.TestCase):
    """Tests for the preference-biased catalog order."""

    @staticmethod
    def _product(pid, category):
        return SimpleNamespace(id=pid, category=category)

    @staticmethod
    def _pref(pid, category):
        return SimpleNamespace(product_id=pid, category=category)

    def test_viewed_then_category_then_rest(self):
        a, b, c = self._product(1, "X"), self._product(2, "Y"), self._product(3, "X")
        ordered = preference_service.sort_by_preference([a, b, c], [self._pref(1, "X")])
        self.assertEqual([p.id for p in ordered], [1, 3, 2])

    def test_ties_keep_input_order(self):
        products = [
            self._product(2, "Y"),
            self._product(4, "Y"),
            self._product(3, "X"),
            self._product(5, "X"),
            self._product(1, "X"),
        ]
        ordered = preference_service.sort_by_preference(products, [self._pref(1, "X")])
        self.assertEqual([p.id for p in ordered], [1, 3, 5, 2, 4])

    def test_no_history_is_passthrough(self):
        products = [self._product(2, "Y"), self._product(1, "X")]
        self.assertEqual(preference_service.sort_by_preference(products, []), products)

    def test_null_categories_never_preferred(self):
        products = [self._product(1, None), self._product(2, "X")]
        history = [self._pref(9, None), self._pref(8, "X")]
        ordered = preference_service.sort_by_preference(products, history)
        self.assertEqual([p.id for p in ordered], [2, 1])


class TestClearPreferences(unittest.TestCase):
    """Tests for clearing one identity's history."""

    def setUp(self):
        reset_database()

    def test_clear_is_scoped(self):
        pid = add_product("Kale Chips")
        mine, theirs = GuestIdentity("mine"), GuestIdentity("theirs")
        _track(mine, pid)
        _track(mine, pid)
        _track(theirs, pid)
        with get_db() as db:
            deleted = preference_service.clear_preferences(db, mine)
        self.assertEqual(deleted, 2)
        self.assertEqual(_count(mine), 0)
        self.assertEqual(_count(theirs), 1)

    def test_clear_requires_identity(self):
        with self.assertRaises(InvalidInputError):
            with get_db() as db:
                preference_service.clear_preferences(db, None)


if __name__ == "__main__":
    unittest.main()
