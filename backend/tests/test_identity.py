"""
Tests for per-request identity resolution.
"""
import unittest

from snacksmart.core import identity
from snacksmart.core.errors import InvalidInputError


class TestFromParts(unittest.TestCase):
    """Exactly one identity form is accepted."""

    def test_user_only(self):
        self.assertEqual(identity.from_parts(5, None), identity.AuthenticatedIdentity(user_id=5))

    def test_session_only(self):
        self.assertEqual(identity.from_parts(None, "guest_1"), identity.GuestIdentity(session_id="guest_1"))

    def test_both_rejected(self):
        with self.assertRaises(InvalidInputError):
            identity.from_parts(5, "guest_1")

    def test_neither_rejected(self):
        with self.assertRaises(InvalidInputError):
            identity.from_parts(None, None)

    def test_blank_session_counts_as_missing(self):
        with self.assertRaises(InvalidInputError):
            identity.from_parts(None, "   ")


class TestResolve(unittest.TestCase):
    """HTTP-side resolution: the authenticated user wins."""

    def test_user_wins_over_session(self):
        self.assertEqual(identity.resolve(7, "guest_1"), identity.AuthenticatedIdentity(user_id=7))

    def test_guest_fallback(self):
        self.assertEqual(identity.resolve(None, " guest_1 "), identity.GuestIdentity(session_id="guest_1"))

    def test_none_when_anonymous(self):
        self.assertIsNone(identity.resolve(None, None))
        self.assertIsNone(identity.resolve(None, ""))

    def test_as_dict(self):
        self.assertEqual(identity.AuthenticatedIdentity(3).as_dict(), {"userId": 3})
        self.assertEqual(identity.GuestIdentity("s").as_dict(), {"sessionId": "s"})


if __name__ == "__main__":
    unittest.main()
