"""Tests for the job application state machine: approve (with job write-back) and reject."""

import os
import tempfile
import unittest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from ratatoing.core.enums import ApplicationStatus, Rank
from ratatoing.models import JobApplication, User
from ratatoing.services.approvals import approve_job, reject_job
from ratatoing.services.errors import InvalidStateError, NotFoundError, UnauthorizedError

from factories import as_caller, make_application, make_banson, make_engine, make_session_factory, make_user


class JobApprovalTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = make_engine()
        self.session = make_session_factory(self.engine)()
        self.reviewer = make_banson(self.session)
        self.applicant = make_user(self.session)

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()


class TestApproveJob(JobApprovalTestCase):
    def test_approval_sets_status_and_applicant_job(self) -> None:
        application = make_application(self.session, self.applicant, job="Forum Moderator")
        result = approve_job(self.session, self.reviewer, application.id)

        self.assertEqual(result.status, ApplicationStatus.APPROVED.value)
        self.assertEqual(result.reviewed_by, self.reviewer.id)
        self.assertIsNotNone(result.reviewed_at)
        self.session.refresh(self.applicant)
        self.assertEqual(self.applicant.job, "Forum Moderator")

    def test_failed_job_write_leaves_application_pending(self) -> None:
        application = make_application(self.session, self.applicant, job="Forum Moderator")
        with patch(
            "ratatoing.services.approvals._assign_job",
            side_effect=OperationalError("UPDATE users", {}, Exception("disk I/O error")),
        ):
            with self.assertRaises(OperationalError):
                approve_job(self.session, self.reviewer, application.id)

        stored = self.session.get(JobApplication, application.id)
        self.session.refresh(stored)
        self.assertEqual(stored.status, ApplicationStatus.PENDING.value)
        self.assertIsNone(stored.reviewed_by)
        applicant = self.session.get(User, self.applicant.id)
        self.session.refresh(applicant)
        self.assertIsNone(applicant.job)

    def test_already_approved_is_invalid_state(self) -> None:
        application = make_application(self.session, self.applicant)
        approve_job(self.session, self.reviewer, application.id)
        with self.assertRaises(InvalidStateError) as ctx:
            approve_job(self.session, self.reviewer, application.id)
        self.assertEqual(ctx.exception.current_status, ApplicationStatus.APPROVED.value)

    def test_unknown_application_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            approve_job(self.session, self.reviewer, 4242)


class TestRejectJob(JobApprovalTestCase):
    def test_rejection_leaves_applicant_untouched(self) -> None:
        application = make_application(self.session, self.applicant, job="Media Curator")
        result = reject_job(self.session, self.reviewer, application.id)
        self.assertEqual(result.status, ApplicationStatus.REJECTED.value)
        self.session.refresh(self.applicant)
        self.assertIsNone(self.applicant.job)

    def test_rejecting_twice_is_invalid_state(self) -> None:
        application = make_application(self.session, self.applicant)
        reject_job(self.session, self.reviewer, application.id)
        with self.assertRaises(InvalidStateError):
            reject_job(self.session, self.reviewer, application.id)

    def test_approved_application_cannot_be_rejected(self) -> None:
        application = make_application(self.session, self.applicant)
        approve_job(self.session, self.reviewer, application.id)
        with self.assertRaises(InvalidStateError):
            reject_job(self.session, self.reviewer, application.id)


class TestJobReviewerAuthority(JobApprovalTestCase):
    def test_lower_ranks_are_unauthorized(self) -> None:
        application = make_application(self.session, self.applicant)
        decided = make_application(
            self.session, make_user(self.session), status=ApplicationStatus.REJECTED
        )
        for rank in (Rank.NIBBLER, Rank.CHEESE_GUARD, Rank.ELITE_NIBBLER):
            reviewer = as_caller(make_user(self.session, rank=rank))
            for target_id in (application.id, decided.id, 4242):
                for action in (approve_job, reject_job):
                    with self.subTest(rank=rank, target=target_id, action=action.__name__):
                        with self.assertRaises(UnauthorizedError):
                            action(self.session, reviewer, target_id)
        self.session.refresh(application)
        self.assertEqual(application.status, ApplicationStatus.PENDING.value)


class TestConcurrentJobDecisions(unittest.TestCase):
    """Approve and reject racing on one application: exactly one decision lands."""

    def setUp(self) -> None:
        fd, self.db_path = tempfile.mkstemp(suffix=".sqlite")
        os.close(fd)
        self.engine = make_engine(f"sqlite:///{self.db_path}")
        self.factory = make_session_factory(self.engine)
        with self.factory() as seed:
            self.first_reviewer = make_banson(seed)
            self.second_reviewer = make_banson(seed)
            applicant = make_user(seed)
            self.applicant_id = applicant.id
            self.application_id = make_application(seed, applicant, job="Forum Moderator").id

    def tearDown(self) -> None:
        self.engine.dispose()
        os.remove(self.db_path)

    def _race(self, winner, loser):
        first = self.factory()
        second = self.factory()
        try:
            # The losing reviewer has already loaded the application as pending.
            stale = second.get(JobApplication, self.application_id)
            self.assertEqual(stale.status, ApplicationStatus.PENDING.value)

            winner(first, self.first_reviewer, self.application_id)
            with self.assertRaises(InvalidStateError):
                loser(second, self.second_reviewer, self.application_id)
        finally:
            first.close()
            second.close()

        check = self.factory()
        try:
            application = check.get(JobApplication, self.application_id)
            applicant = check.get(User, self.applicant_id)
            return application.status, application.reviewed_by, applicant.job
        finally:
            check.close()

    def test_reject_wins_over_late_approve(self) -> None:
        status, reviewed_by, job = self._race(reject_job, approve_job)
        self.assertEqual(status, ApplicationStatus.REJECTED.value)
        self.assertEqual(reviewed_by, self.first_reviewer.id)
        self.assertIsNone(job)

    def test_approve_wins_over_late_reject(self) -> None:
        status, reviewed_by, job = self._race(approve_job, reject_job)
        self.assertEqual(status, ApplicationStatus.APPROVED.value)
        self.assertEqual(reviewed_by, self.first_reviewer.id)
        self.assertEqual(job, "Forum Moderator")

    def test_second_approve_does_not_reassign_job(self) -> None:
        status, _, job = self._race(approve_job, approve_job)
        self.assertEqual(status, ApplicationStatus.APPROVED.value)
        self.assertEqual(job, "Forum Moderator")
