"""Tests for the registration state machine: approve and ban pending users."""

import os
import tempfile
import unittest

from ratatoing.core.enums import Rank, UserStatus
from ratatoing.models import User
from ratatoing.services.approvals import approve_user, ban_user
from ratatoing.services.errors import InvalidStateError, NotFoundError, UnauthorizedError

from factories import as_caller, make_banson, make_engine, make_session_factory, make_user


class UserApprovalTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = make_engine()
        self.session = make_session_factory(self.engine)()
        self.reviewer = make_banson(self.session)

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()


class TestApproveUser(UserApprovalTestCase):
    def test_pending_user_becomes_active_with_reviewer_recorded(self) -> None:
        user = make_user(self.session, status=UserStatus.PENDING)
        result = approve_user(self.session, self.reviewer, user.id)
        self.assertEqual(result.status, UserStatus.ACTIVE.value)
        self.assertEqual(result.approved_by, self.reviewer.id)
        self.assertIsNotNone(result.approved_at)

    def test_active_user_is_invalid_state(self) -> None:
        user = make_user(self.session, status=UserStatus.ACTIVE)
        with self.assertRaises(InvalidStateError) as ctx:
            approve_user(self.session, self.reviewer, user.id)
        self.assertEqual(ctx.exception.current_status, UserStatus.ACTIVE.value)

    def test_banned_user_cannot_be_approved(self) -> None:
        user = make_user(self.session, status=UserStatus.BANNED)
        with self.assertRaises(InvalidStateError):
            approve_user(self.session, self.reviewer, user.id)
        self.session.refresh(user)
        self.assertEqual(user.status, UserStatus.BANNED.value)
        self.assertIsNone(user.approved_by)

    def test_unknown_user_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            approve_user(self.session, self.reviewer, 9999)
        self.assertEqual(ctx.exception.message, "User 9999 not found.")


class TestBanUser(UserApprovalTestCase):
    def test_pending_user_becomes_banned(self) -> None:
        user = make_user(self.session, status=UserStatus.PENDING)
        result = ban_user(self.session, self.reviewer, user.id)
        self.assertEqual(result.status, UserStatus.BANNED.value)
        self.assertEqual(result.approved_by, self.reviewer.id)

    def test_active_user_cannot_be_banned(self) -> None:
        user = make_user(self.session, status=UserStatus.ACTIVE)
        with self.assertRaises(InvalidStateError):
            ban_user(self.session, self.reviewer, user.id)

    def test_banned_is_terminal(self) -> None:
        user = make_user(self.session, status=UserStatus.PENDING)
        ban_user(self.session, self.reviewer, user.id)
        with self.assertRaises(InvalidStateError):
            ban_user(self.session, self.reviewer, user.id)
        with self.assertRaises(InvalidStateError):
            approve_user(self.session, self.reviewer, user.id)


class TestReviewerAuthority(UserApprovalTestCase):
    """Every rank below Banson is refused, whatever the target's state."""

    def test_lower_ranks_are_unauthorized_for_any_target(self) -> None:
        pending = make_user(self.session, status=UserStatus.PENDING)
        active = make_user(self.session, status=UserStatus.ACTIVE)
        for rank in (Rank.NIBBLER, Rank.CHEESE_GUARD, Rank.ELITE_NIBBLER):
            reviewer = as_caller(make_user(self.session, rank=rank))
            for target_id in (pending.id, active.id, 9999):
                for action in (approve_user, ban_user):
                    with self.subTest(rank=rank, target=target_id, action=action.__name__):
                        with self.assertRaises(UnauthorizedError):
                            action(self.session, reviewer, target_id)
        self.session.refresh(pending)
        self.assertEqual(pending.status, UserStatus.PENDING.value)
        self.assertIsNone(pending.approved_by)


class TestConcurrentDecisions(unittest.TestCase):
    """Two reviewers deciding the same registration: exactly one wins."""

    def setUp(self) -> None:
        fd, self.db_path = tempfile.mkstemp(suffix=".sqlite")
        os.close(fd)
        self.engine = make_engine(f"sqlite:///{self.db_path}")
        self.factory = make_session_factory(self.engine)
        with self.factory() as seed:
            self.first_reviewer = make_banson(seed)
            self.second_reviewer = make_banson(seed)
            self.user_id = make_user(seed, status=UserStatus.PENDING).id

    def tearDown(self) -> None:
        self.engine.dispose()
        os.remove(self.db_path)

    def test_ban_and_approve_race(self) -> None:
        first = self.factory()
        second = self.factory()
        try:
            # Second reviewer has already seen the user as pending.
            stale = second.get(User, self.user_id)
            self.assertEqual(stale.status, UserStatus.PENDING.value)

            ban_user(first, self.first_reviewer, self.user_id)
            with self.assertRaises(InvalidStateError):
                approve_user(second, self.second_reviewer, self.user_id)
        finally:
            first.close()
            second.close()

        with self.factory() as check:
            user = check.get(User, self.user_id)
            self.assertEqual(user.status, UserStatus.BANNED.value)
            self.assertEqual(user.approved_by, self.first_reviewer.id)
