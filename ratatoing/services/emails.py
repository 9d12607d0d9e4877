"""Internal e-mail between members. Only the two parties of a message can see it."""

import logging

from sqlalchemy.orm import Session

from ratatoing.models import Email
from ratatoing.schemas.auth import CurrentUser
from ratatoing.services.errors import ConstraintViolationError, NotFoundError, UnauthorizedError
from ratatoing.services.registration import get_user_by_username

logger = logging.getLogger(__name__)


def _load_email(session: Session, email_id: int) -> Email:
    email = session.get(Email, email_id)
    if email is None:
        raise NotFoundError("email", email_id)
    return email


def _ensure_party(email: Email, viewer: CurrentUser) -> None:
    if viewer.id not in (email.sender_id, email.recipient_id):
        logger.warning("Email access refused", extra={"email_id": email.id, "viewer_id": viewer.id})
        raise UnauthorizedError("You can only access your own e-mails.")


def send_email(
    session: Session,
    sender: CurrentUser,
    recipient_username: str,
    subject: str,
    body: str,
) -> Email:
    recipient = get_user_by_username(session, recipient_username)
    if recipient is None:
        raise NotFoundError("recipient", recipient_username)
    if recipient.id == sender.id:
        raise ConstraintViolationError("You cannot e-mail yourself.")
    subject = subject.strip()
    if not subject or not body.strip():
        raise ConstraintViolationError("Subject and body are required.")

    email = Email(sender_id=sender.id, recipient_id=recipient.id, subject=subject, body=body)
    session.add(email)
    session.commit()
    session.refresh(email)
    logger.info(
        "Email sent",
        extra={"email_id": email.id, "sender_id": sender.id, "recipient_id": recipient.id},
    )
    return email


def list_inbox(session: Session, viewer: CurrentUser) -> list[Email]:
    return (
        session.query(Email)
        .filter(Email.recipient_id == viewer.id)
        .order_by(Email.created_at.desc(), Email.id.desc())
        .all()
    )


def list_sent(session: Session, viewer: CurrentUser) -> list[Email]:
    return (
        session.query(Email)
        .filter(Email.sender_id == viewer.id)
        .order_by(Email.created_at.desc(), Email.id.desc())
        .all()
    )


def read_email(session: Session, viewer: CurrentUser, email_id: int) -> Email:
    """Fetch one e-mail. Opening it as the recipient marks it read."""
    email = _load_email(session, email_id)
    _ensure_party(email, viewer)
    if email.recipient_id == viewer.id and not email.read:
        email.read = True
        session.commit()
        session.refresh(email)
    return email


def mark_read(session: Session, viewer: CurrentUser, email_id: int) -> Email:
    email = _load_email(session, email_id)
    if email.recipient_id != viewer.id:
        raise UnauthorizedError("Only the recipient can mark an e-mail as read.")
    if not email.read:
        email.read = True
        session.commit()
        session.refresh(email)
    return email


def delete_email(session: Session, viewer: CurrentUser, email_id: int) -> None:
    email = _load_email(session, email_id)
    _ensure_party(email, viewer)
    session.delete(email)
    session.commit()
    logger.info("Email deleted", extra={"email_id": email_id, "viewer_id": viewer.id})
