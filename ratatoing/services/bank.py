"""Pocket sniffles: balance moves between members, Banson grants, and the ledger.

Debits are conditional UPDATEs (balance >= amount) so concurrent spends cannot drive a
balance negative. credit/debit only stage changes; callers commit.
"""

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ratatoing.core.enums import TransactionType
from ratatoing.models import Transaction, User
from ratatoing.schemas.auth import CurrentUser
from ratatoing.services.authorization import ensure_authority, has_authority
from ratatoing.services.errors import (
    ConstraintViolationError,
    InsufficientFundsError,
    NotFoundError,
)
from ratatoing.services.registration import get_user_by_username

logger = logging.getLogger(__name__)

DEFAULT_LEDGER_LIMIT = 20
MAX_LEDGER_LIMIT = 200


def _require_positive(amount: int) -> None:
    if amount <= 0:
        raise ConstraintViolationError("Amount must be a positive number.")


def credit(session: Session, user_id: int, amount: int) -> None:
    _require_positive(amount)
    updated = (
        session.query(User)
        .filter(User.id == user_id)
        .update(
            {"pocket_sniffles": User.pocket_sniffles + amount},
            synchronize_session=False,
        )
    )
    if updated != 1:
        raise NotFoundError("user", user_id)


def debit(session: Session, user_id: int, amount: int) -> None:
    _require_positive(amount)
    updated = (
        session.query(User)
        .filter(User.id == user_id, User.pocket_sniffles >= amount)
        .update(
            {"pocket_sniffles": User.pocket_sniffles - amount},
            synchronize_session=False,
        )
    )
    if updated != 1:
        if session.get(User, user_id) is None:
            raise NotFoundError("user", user_id)
        raise InsufficientFundsError("Transfer failed, insufficient funds.")


def record_transaction(
    session: Session,
    *,
    sender_id: int | None,
    recipient_id: int | None,
    amount: int,
    kind: TransactionType,
    description: str | None = None,
) -> Transaction:
    row = Transaction(
        sender_id=sender_id,
        recipient_id=recipient_id,
        amount=amount,
        type=kind.value,
        description=description,
    )
    session.add(row)
    return row


def transfer(
    session: Session,
    sender: CurrentUser,
    recipient_username: str,
    amount: int,
    description: str | None = None,
) -> User:
    """Move amount from the caller to another member. Returns the caller's refreshed row."""
    _require_positive(amount)
    recipient = get_user_by_username(session, recipient_username)
    if recipient is None:
        raise NotFoundError("recipient", recipient_username)
    if recipient.id == sender.id:
        raise ConstraintViolationError("You cannot transfer to yourself.")

    try:
        debit(session, sender.id, amount)
        credit(session, recipient.id, amount)
        record_transaction(
            session,
            sender_id=sender.id,
            recipient_id=recipient.id,
            amount=amount,
            kind=TransactionType.TRANSFER,
            description=description,
        )
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(
        "Transfer completed",
        extra={"sender_id": sender.id, "recipient_id": recipient.id, "amount": amount},
    )
    return session.get(User, sender.id)


def grant(
    session: Session,
    admin: CurrentUser,
    username: str,
    amount: int,
    description: str | None = None,
) -> User:
    """Banson-only deposit into a member's balance. Returns the recipient's refreshed row."""
    ensure_authority(admin, "grant_pocket_sniffles")
    _require_positive(amount)
    recipient = get_user_by_username(session, username)
    if recipient is None:
        raise NotFoundError("user", username)

    try:
        credit(session, recipient.id, amount)
        record_transaction(
            session,
            sender_id=None,
            recipient_id=recipient.id,
            amount=amount,
            kind=TransactionType.ADMIN,
            description=description or f"Admin deposit by {admin.username}",
        )
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(recipient)
    logger.info(
        "Pocket sniffles granted",
        extra={"recipient_id": recipient.id, "amount": amount, "admin_id": admin.id},
    )
    return recipient


def list_transactions(
    session: Session,
    viewer: CurrentUser,
    limit: int = DEFAULT_LEDGER_LIMIT,
) -> list[Transaction]:
    """Newest first. Bansons see the whole ledger; everyone else only their own rows."""
    if limit < 1 or limit > MAX_LEDGER_LIMIT:
        raise ConstraintViolationError(f"limit must be between 1 and {MAX_LEDGER_LIMIT}.")
    query = session.query(Transaction)
    if not has_authority(viewer.rank):
        query = query.filter(
            or_(Transaction.sender_id == viewer.id, Transaction.recipient_id == viewer.id)
        )
    return query.order_by(Transaction.created_at.desc(), Transaction.id.desc()).limit(limit).all()
