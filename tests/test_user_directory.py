"""Tests for user identity lookups."""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock

from tests.mock_utils import FirestoreTestCase
from tourney.tournament.utils import collect_user_ids
from tourney.user import UserDirectory
from tourney.user.directory import display_name


class UserDirectoryTestCase(FirestoreTestCase):
    """Test case for UserDirectory."""

    def test_lookup_resolves_known_users(self) -> None:
        """Test that known ids map to name and email."""
        self.add_user("u1", "Ada", "ada@example.com")
        self.mock_db.collection("users").document("u2").set({"username": "bea"})

        identities = UserDirectory.lookup(["u1", "u2", "u1", None], db=self.mock_db)

        self.assertEqual(
            identities,
            {
                "u1": {"name": "Ada", "email": "ada@example.com"},
                "u2": {"name": "bea", "email": None},
            },
        )

    def test_lookup_omits_missing_users(self) -> None:
        """Test that ids without a user document are left out."""
        self.add_user("u1", "Ada")
        identities = UserDirectory.lookup(["u1", "ghost"], db=self.mock_db)
        self.assertEqual(list(identities), ["u1"])

    def test_lookup_uses_one_round_trip(self) -> None:
        """Test that all ids are fetched with a single batched read."""
        db = MagicMock()
        db.get_all.return_value = []

        self.assertEqual(UserDirectory.lookup(["a", "b", "a"], db=db), {})

        db.get_all.assert_called_once()
        self.assertEqual(len(db.get_all.call_args[0][0]), 2)

    def test_lookup_without_ids_skips_the_database(self) -> None:
        """Test that an empty lookup does not query Firestore."""
        db = MagicMock()
        self.assertEqual(UserDirectory.lookup([None, ""], db=db), {})
        db.get_all.assert_not_called()


class DisplayNameTestCase(unittest.TestCase):
    """Test case for display-name fallbacks."""

    def test_display_name(self) -> None:
        """Test the name, username and placeholder fallbacks."""
        self.assertEqual(display_name({"name": "Ada", "username": "ada"}), "Ada")
        self.assertEqual(display_name({"name": "", "username": "ada"}), "ada")
        self.assertEqual(display_name({}), "Unknown Player")

    def test_collect_user_ids(self) -> None:
        """Test that every participant and match slot is collected."""
        tournament = {
            "participants": ["a", "b"],
            "rounds": [
                {"matches": [{"p1": "a", "p2": "c", "winner": "c"}]},
                {"matches": [{"p1": "d", "p2": None, "winner": "d"}]},
            ],
        }
        self.assertEqual(collect_user_ids(tournament), {"a", "b", "c", "d"})


if __name__ == "__main__":
    unittest.main()
