"""
Tests for the /api/products endpoints.
"""
import unittest

from fastapi.testclient import TestClient

import main
from tests.helpers import add_product, add_user, auth_header, reset_database


class TestCatalogAPI(unittest.TestCase):
    """Tests for listing, searching and sorting the catalog."""

    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(main.app)

    def setUp(self):
        reset_database()
        self.sweet = add_product("Sweet Potato Chips", category="Chips", price="4.79")
        self.seaweed = add_product("Seaweed Snacks", category="Seaweed", price="2.99")
        self.kale = add_product("Kale Chips", category="Chips", price="5.99")
        self.bar = add_product("Dark Chocolate Bar", category="Chocolate", price="3.99", description="85% cacao")
        self.beet = add_product("Beet Chips", category="Chips", status="inactive")

    def _ids(self, **params):
        response = self.client.get("/api/products", params=params)
        self.assertEqual(response.status_code, 200)
        return [p["id"] for p in response.json()]

    def test_default_lists_active_newest_first(self):
        self.assertEqual(self._ids(), [self.bar, self.kale, self.seaweed, self.sweet])

    def test_search_is_case_insensitive(self):
        self.assertEqual(self._ids(search="CHIPS"), [self.kale, self.sweet])
        self.assertEqual(self._ids(search="cacao"), [self.bar])
        self.assertEqual(self._ids(search="  "), [self.bar, self.kale, self.seaweed, self.sweet])

    def test_sort_by_price(self):
        self.assertEqual(self._ids(sortBy="price"), [self.seaweed, self.bar, self.sweet, self.kale])
        self.assertEqual(self._ids(sortBy="price", sortOrder="desc"), [self.kale, self.sweet, self.bar, self.seaweed])

    def test_sort_by_name(self):
        self.assertEqual(self._ids(sortBy="name"), [self.bar, self.kale, self.seaweed, self.sweet])

    def test_price_is_a_number(self):
        product = self.client.get(f"/api/products/{self.sweet}").json()
        self.assertEqual(product["price"], 4.79)
        self.assertEqual(product["status"], "active")

    def test_preference_sort_for_guest(self):
        self.client.post(
            "/api/preferences/track",
            json={"productId": self.sweet, "actionType": "view", "sessionId": "guest_1"},
        )
        ids = self._ids(sortBy="preferences", sessionId="guest_1")
        self.assertEqual(ids, [self.sweet, self.kale, self.bar, self.seaweed])

    def test_preference_sort_respects_search(self):
        self.client.post(
            "/api/preferences/track",
            json={"productId": self.bar, "actionType": "click", "sessionId": "guest_1"},
        )
        ids = self._ids(sortBy="preferences", sessionId="guest_1", search="chips")
        self.assertEqual(ids, [self.kale, self.sweet])

    def test_preference_sort_for_user(self):
        uid = add_user()
        self.client.post(
            "/api/preferences/track",
            json={"productId": self.seaweed, "actionType": "view"},
            headers=auth_header(uid),
        )
        response = self.client.get("/api/products", params={"sortBy": "preferences"}, headers=auth_header(uid))
        self.assertEqual(response.json()[0]["id"], self.seaweed)

    def test_preference_sort_without_history_uses_default(self):
        self.assertEqual(
            self._ids(sortBy="preferences", sessionId="nobody"),
            [self.bar, self.kale, self.seaweed, self.sweet],
        )

    def test_get_unknown_product(self):
        response = self.client.get("/api/products/9999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"detail": "Product not found"})

    def test_out_of_range_product_id(self):
        for product_id in ("0", "-1", "100000000000000000000"):
            with self.subTest(product_id=product_id):
                response = self.client.get(f"/api/products/{product_id}")
                self.assertEqual(response.status_code, 400)


if __name__ == "__main__":
    unittest.main()
