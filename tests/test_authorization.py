"""Tests for the rank ordering and the single authority predicate."""

import unittest

from ratatoing.core.enums import Rank
from ratatoing.schemas.auth import CurrentUser
from ratatoing.services.authorization import ensure_authority, has_authority
from ratatoing.services.errors import UnauthorizedError


class TestRankOrdering(unittest.TestCase):
    """Ranks compare by hierarchy, not alphabetically."""

    def test_declaration_order(self) -> None:
        self.assertLess(Rank.NIBBLER, Rank.CHEESE_GUARD)
        self.assertLess(Rank.CHEESE_GUARD, Rank.ELITE_NIBBLER)
        self.assertLess(Rank.ELITE_NIBBLER, Rank.BANSON)
        # Alphabetically "Banson" < "Nibbler"; the hierarchy says otherwise.
        self.assertGreater(Rank.BANSON, Rank.NIBBLER)

    def test_top_is_banson(self) -> None:
        self.assertIs(Rank.top(), Rank.BANSON)
        self.assertEqual(max(Rank), Rank.BANSON)


class TestHasAuthority(unittest.TestCase):
    def test_only_top_rank_qualifies(self) -> None:
        self.assertTrue(has_authority(Rank.BANSON))
        for rank in (Rank.NIBBLER, Rank.CHEESE_GUARD, Rank.ELITE_NIBBLER):
            with self.subTest(rank=rank):
                self.assertFalse(has_authority(rank))

    def test_accepts_stored_string(self) -> None:
        self.assertTrue(has_authority("Banson"))
        self.assertFalse(has_authority("Elite Nibbler"))

    def test_unknown_or_missing_rank_never_qualifies(self) -> None:
        self.assertFalse(has_authority("banson"))
        self.assertFalse(has_authority("Admin"))
        self.assertFalse(has_authority(None))


class TestEnsureAuthority(unittest.TestCase):
    def test_banson_passes(self) -> None:
        ensure_authority(CurrentUser(id=1, username="remy", rank=Rank.BANSON), "approve_user")

    def test_lower_rank_raises_with_reason(self) -> None:
        actor = CurrentUser(id=2, username="emile", rank=Rank.ELITE_NIBBLER)
        with self.assertRaises(UnauthorizedError) as ctx:
            ensure_authority(actor, "approve_user")
        self.assertEqual(ctx.exception.code, "unauthorized")
        self.assertIn("Elite Nibbler", ctx.exception.message)
        self.assertIn("approve user", ctx.exception.message)
