"""Tests for pocket sniffles transfers, admin grants and the ledger."""

import unittest

from ratatoing.core.enums import TransactionType
from ratatoing.models import Transaction, User
from ratatoing.services.bank import grant, list_transactions, transfer
from ratatoing.services.errors import (
    ConstraintViolationError,
    InsufficientFundsError,
    NotFoundError,
    UnauthorizedError,
)

from factories import as_caller, make_banson, make_engine, make_session_factory, make_user


class BankTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = make_engine()
        self.session = make_session_factory(self.engine)()
        self.admin = make_banson(self.session)
        self.remy = make_user(self.session, username="remy", pocket_sniffles=100)
        self.emile = make_user(self.session, username="emile", pocket_sniffles=10)

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()

    def _balance(self, user_id: int) -> int:
        user = self.session.get(User, user_id)
        self.session.refresh(user)
        return user.pocket_sniffles


class TestTransfer(BankTestCase):
    def test_moves_balance_and_records_transaction(self) -> None:
        sender = transfer(self.session, as_caller(self.remy), "Emile", 40, "cheese money")
        self.assertEqual(sender.pocket_sniffles, 60)
        self.assertEqual(self._balance(self.emile.id), 50)
        row = self.session.query(Transaction).one()
        self.assertEqual(row.type, TransactionType.TRANSFER.value)
        self.assertEqual((row.sender_id, row.recipient_id, row.amount), (self.remy.id, self.emile.id, 40))

    def test_insufficient_funds_changes_nothing(self) -> None:
        with self.assertRaises(InsufficientFundsError) as ctx:
            transfer(self.session, as_caller(self.emile), "remy", 11)
        self.assertEqual(ctx.exception.code, "insufficient_funds")
        self.assertIsInstance(ctx.exception, ConstraintViolationError)
        self.assertEqual(self._balance(self.emile.id), 10)
        self.assertEqual(self._balance(self.remy.id), 100)
        self.assertEqual(self.session.query(Transaction).count(), 0)

    def test_unknown_recipient_and_self_transfer(self) -> None:
        with self.assertRaises(NotFoundError):
            transfer(self.session, as_caller(self.remy), "skinner", 5)
        with self.assertRaises(ConstraintViolationError):
            transfer(self.session, as_caller(self.remy), "remy", 5)

    def test_non_positive_amount(self) -> None:
        with self.assertRaises(ConstraintViolationError):
            transfer(self.session, as_caller(self.remy), "emile", 0)


class TestGrant(BankTestCase):
    def test_admin_grant_credits_recipient(self) -> None:
        recipient = grant(self.session, self.admin, "emile", 25)
        self.assertEqual(recipient.pocket_sniffles, 35)
        row = self.session.query(Transaction).one()
        self.assertEqual(row.type, TransactionType.ADMIN.value)
        self.assertIsNone(row.sender_id)

    def test_member_cannot_grant(self) -> None:
        with self.assertRaises(UnauthorizedError):
            grant(self.session, as_caller(self.remy), "emile", 25)
        self.assertEqual(self._balance(self.emile.id), 10)


class TestListTransactions(BankTestCase):
    def test_members_see_only_their_rows_newest_first(self) -> None:
        colette = make_user(self.session, username="colette", pocket_sniffles=10)
        transfer(self.session, as_caller(self.remy), "emile", 1)
        transfer(self.session, as_caller(colette), "remy", 2)
        transfer(self.session, as_caller(colette), "emile", 3)

        remy_rows = list_transactions(self.session, as_caller(self.remy))
        self.assertEqual([t.amount for t in remy_rows], [2, 1])
        all_rows = list_transactions(self.session, self.admin)
        self.assertEqual(len(all_rows), 3)

    def test_limit_bounds(self) -> None:
        with self.assertRaises(ConstraintViolationError):
            list_transactions(self.session, self.admin, limit=0)
