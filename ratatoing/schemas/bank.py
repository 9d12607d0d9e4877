"""Pydantic schemas for balance transfers and the transaction ledger."""

from datetime import datetime

from pydantic import BaseModel, Field


class TransferRequest(BaseModel):
    recipient_username: str = Field(..., min_length=3, max_length=50)
    amount: int = Field(..., gt=0, le=1_000_000)
    description: str | None = Field(default=None, max_length=500)


class GrantRequest(BaseModel):
    """Body for POST /bank/grant (Banson only)."""

    username: str = Field(..., min_length=3, max_length=50)
    amount: int = Field(..., gt=0, le=1_000_000)
    description: str | None = Field(default=None, max_length=500)


class TransactionOut(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    sender_id: int | None = None
    recipient_id: int | None = None
    amount: int
    type: str
    description: str | None = None
    created_at: datetime | None = None


class TransactionsResponse(BaseModel):
    transactions: list[TransactionOut]


class BalanceResponse(BaseModel):
    """Caller's balance after a balance-changing request."""

    message: str
    pocket_sniffles: int
