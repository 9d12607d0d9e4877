"""Tests for internal e-mail: sending, folders, reading and deletion."""

import unittest

from ratatoing.models import Email
from ratatoing.services.emails import (
    delete_email,
    list_inbox,
    list_sent,
    mark_read,
    read_email,
    send_email,
)
from ratatoing.services.errors import ConstraintViolationError, NotFoundError, UnauthorizedError

from factories import as_caller, make_engine, make_session_factory, make_user


class EmailTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = make_engine()
        self.session = make_session_factory(self.engine)()
        self.remy = as_caller(make_user(self.session, username="remy"))
        self.emile = as_caller(make_user(self.session, username="emile"))
        self.django = as_caller(make_user(self.session, username="django"))

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()


class TestSend(EmailTestCase):
    def test_send_lands_in_both_folders(self) -> None:
        email = send_email(self.session, self.remy, "Emile", "Dinner", "Meet at the kitchen.")
        self.assertFalse(email.read)
        self.assertEqual(email.recipient_id, self.emile.id)
        self.assertEqual([e.id for e in list_inbox(self.session, self.emile)], [email.id])
        self.assertEqual([e.id for e in list_sent(self.session, self.remy)], [email.id])
        self.assertEqual(list_inbox(self.session, self.remy), [])

    def test_folders_are_newest_first(self) -> None:
        first = send_email(self.session, self.remy, "emile", "One", "first")
        second = send_email(self.session, self.django, "emile", "Two", "second")
        self.assertEqual([e.id for e in list_inbox(self.session, self.emile)], [second.id, first.id])

    def test_unknown_recipient_and_self(self) -> None:
        with self.assertRaises(NotFoundError):
            send_email(self.session, self.remy, "skinner", "Hi", "Who are you?")
        with self.assertRaises(ConstraintViolationError):
            send_email(self.session, self.remy, "remy", "Note", "to self")
        self.assertEqual(self.session.query(Email).count(), 0)


class TestReadAndDelete(EmailTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.email = send_email(self.session, self.remy, "emile", "Cheese", "Try the brie.")

    def test_recipient_opening_marks_read(self) -> None:
        self.assertTrue(read_email(self.session, self.emile, self.email.id).read)

    def test_sender_opening_leaves_unread(self) -> None:
        self.assertFalse(read_email(self.session, self.remy, self.email.id).read)

    def test_outsider_cannot_open_or_delete(self) -> None:
        with self.assertRaises(UnauthorizedError):
            read_email(self.session, self.django, self.email.id)
        with self.assertRaises(UnauthorizedError):
            delete_email(self.session, self.django, self.email.id)
        self.assertIsNotNone(self.session.get(Email, self.email.id))

    def test_only_recipient_marks_read(self) -> None:
        with self.assertRaises(UnauthorizedError):
            mark_read(self.session, self.remy, self.email.id)
        self.assertTrue(mark_read(self.session, self.emile, self.email.id).read)

    def test_either_party_deletes(self) -> None:
        delete_email(self.session, self.emile, self.email.id)
        self.assertEqual(self.session.query(Email).count(), 0)
        with self.assertRaises(NotFoundError):
            read_email(self.session, self.remy, self.email.id)


if __name__ == "__main__":
    unittest.main()
