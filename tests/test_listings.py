"""Tests for the approval queues: pending (oldest first) and recently decided (newest first)."""

import unittest
from datetime import UTC, datetime, timedelta

from ratatoing.core.enums import ApplicationStatus, EntityKind, UserStatus
from ratatoing.models import User
from ratatoing.services.approvals import (
    approve_job,
    approve_user,
    ban_user,
    list_pending,
    list_recently_decided,
    reject_job,
)
from ratatoing.services.errors import ConstraintViolationError

from factories import make_application, make_banson, make_engine, make_session_factory, make_user

BASE = datetime(2026, 5, 1, tzinfo=UTC)


class ListingTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = make_engine()
        self.session = make_session_factory(self.engine)()
        self.reviewer = make_banson(self.session)

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()


class TestListPending(ListingTestCase):
    def test_users_oldest_first(self) -> None:
        newest = make_user(self.session, status=UserStatus.PENDING, created_at=BASE + timedelta(hours=2))
        oldest = make_user(self.session, status=UserStatus.PENDING, created_at=BASE)
        middle = make_user(self.session, status=UserStatus.PENDING, created_at=BASE + timedelta(hours=1))
        make_user(self.session, status=UserStatus.ACTIVE, created_at=BASE - timedelta(days=1))

        rows = list_pending(self.session, EntityKind.USERS)
        self.assertEqual([u.id for u in rows], [oldest.id, middle.id, newest.id])

    def test_same_timestamp_falls_back_to_id(self) -> None:
        first = make_user(self.session, status=UserStatus.PENDING, created_at=BASE)
        second = make_user(self.session, status=UserStatus.PENDING, created_at=BASE)
        rows = list_pending(self.session, "users")
        self.assertEqual([u.id for u in rows], [first.id, second.id])

    def test_approved_user_leaves_queue(self) -> None:
        a = make_user(self.session, status=UserStatus.PENDING, created_at=BASE)
        b = make_user(self.session, status=UserStatus.PENDING, created_at=BASE + timedelta(hours=1))
        approve_user(self.session, self.reviewer, a.id)
        rows = list_pending(self.session, EntityKind.USERS)
        self.assertEqual([u.id for u in rows], [b.id])

    def test_applications_oldest_first(self) -> None:
        late = make_application(self.session, make_user(self.session), created_at=BASE + timedelta(hours=3))
        early = make_application(self.session, make_user(self.session), created_at=BASE)
        make_application(
            self.session,
            make_user(self.session),
            status=ApplicationStatus.REJECTED,
            created_at=BASE - timedelta(days=1),
        )
        rows = list_pending(self.session, EntityKind.JOBS)
        self.assertEqual([a.id for a in rows], [early.id, late.id])

    def test_unknown_kind(self) -> None:
        with self.assertRaises(ConstraintViolationError):
            list_pending(self.session, "shops")


class TestListRecentlyDecided(ListingTestCase):
    def test_users_newest_decision_first_and_both_outcomes(self) -> None:
        first = make_user(self.session, status=UserStatus.PENDING)
        second = make_user(self.session, status=UserStatus.PENDING)
        make_user(self.session, status=UserStatus.PENDING)
        approve_user(self.session, self.reviewer, first.id)
        ban_user(self.session, self.reviewer, second.id)

        rows = list_recently_decided(self.session, EntityKind.USERS, limit=10)
        self.assertEqual([u.id for u in rows], [second.id, first.id])
        self.assertEqual(
            {u.status for u in rows}, {UserStatus.ACTIVE.value, UserStatus.BANNED.value}
        )

    def test_limit_bounds_result(self) -> None:
        for _ in range(3):
            user = make_user(self.session, status=UserStatus.PENDING)
            approve_user(self.session, self.reviewer, user.id)
        rows = list_recently_decided(self.session, EntityKind.USERS, limit=2)
        self.assertEqual(len(rows), 2)

    def test_window_excludes_old_decisions(self) -> None:
        recent = make_user(self.session, status=UserStatus.PENDING)
        approve_user(self.session, self.reviewer, recent.id)
        old = make_user(self.session, status=UserStatus.PENDING)
        approve_user(self.session, self.reviewer, old.id)
        self.session.query(User).filter(User.id == old.id).update(
            {"approved_at": datetime.now(UTC) - timedelta(days=90)},
            synchronize_session=False,
        )
        self.session.commit()

        rows = list_recently_decided(
            self.session, EntityKind.USERS, limit=10, window=timedelta(days=30)
        )
        self.assertEqual([u.id for u in rows], [recent.id])
        unbounded = list_recently_decided(self.session, EntityKind.USERS, limit=10)
        self.assertEqual({u.id for u in unbounded}, {recent.id, old.id})

    def test_applications_include_approved_and_rejected(self) -> None:
        approved = make_application(self.session, make_user(self.session))
        rejected = make_application(self.session, make_user(self.session))
        pending = make_application(self.session, make_user(self.session))
        approve_job(self.session, self.reviewer, approved.id)
        reject_job(self.session, self.reviewer, rejected.id)

        rows = list_recently_decided(self.session, EntityKind.JOBS, limit=5)
        ids = [a.id for a in rows]
        self.assertEqual(ids, [rejected.id, approved.id])
        self.assertNotIn(pending.id, ids)

    def test_limit_out_of_range(self) -> None:
        for limit in (0, 101):
            with self.subTest(limit=limit):
                with self.assertRaises(ConstraintViolationError):
                    list_recently_decided(self.session, EntityKind.USERS, limit=limit)
