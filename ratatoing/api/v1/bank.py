"""Bank endpoints: transfers, Banson grants and the transaction ledger."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ratatoing.api.v1.auth import get_current_user
from ratatoing.api.v1.errors import to_http_exception
from ratatoing.core.database import get_db
from ratatoing.schemas.auth import CurrentUser
from ratatoing.schemas.bank import (
    BalanceResponse,
    GrantRequest,
    TransactionOut,
    TransactionsResponse,
    TransferRequest,
)
from ratatoing.services import bank
from ratatoing.services.errors import WorkflowError

router = APIRouter()


@router.get("/transactions", response_model=TransactionsResponse)
def get_transactions(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    limit: Annotated[int, Query(ge=1, le=bank.MAX_LEDGER_LIMIT)] = bank.DEFAULT_LEDGER_LIMIT,
) -> TransactionsResponse:
    """Newest first. Members see their own rows; Bansons see the whole ledger."""
    try:
        rows = bank.list_transactions(db, current_user, limit)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return TransactionsResponse(transactions=[TransactionOut.model_validate(t) for t in rows])


@router.post("/transfer", response_model=BalanceResponse)
def post_transfer(
    body: TransferRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> BalanceResponse:
    try:
        sender = bank.transfer(
            db, current_user, body.recipient_username, body.amount, body.description
        )
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return BalanceResponse(
        message=f"Transferred {body.amount} pocket sniffles to {body.recipient_username}.",
        pocket_sniffles=sender.pocket_sniffles,
    )


@router.post("/grant", response_model=BalanceResponse)
def post_grant(
    body: GrantRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> BalanceResponse:
    """Deposit pocket sniffles into a member's balance (Banson only). Returns their new balance."""
    try:
        recipient = bank.grant(db, current_user, body.username, body.amount, body.description)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return BalanceResponse(
        message=f"Granted {body.amount} pocket sniffles to {recipient.username}.",
        pocket_sniffles=recipient.pocket_sniffles,
    )
