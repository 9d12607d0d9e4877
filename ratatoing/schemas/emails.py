"""Pydantic schemas for internal e-mail."""

from datetime import datetime

from pydantic import BaseModel, Field

from ratatoing.models import Email


class SendEmailRequest(BaseModel):
    recipient_username: str = Field(..., min_length=3, max_length=50)
    subject: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1, max_length=10_000)


class EmailOut(BaseModel):
    """An e-mail with both parties' usernames for display."""

    id: int
    sender_id: int
    sender_username: str | None = None
    recipient_id: int
    recipient_username: str | None = None
    subject: str
    body: str
    read: bool
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, email: Email) -> "EmailOut":
        return cls(
            id=email.id,
            sender_id=email.sender_id,
            sender_username=email.sender.username if email.sender is not None else None,
            recipient_id=email.recipient_id,
            recipient_username=email.recipient.username if email.recipient is not None else None,
            subject=email.subject,
            body=email.body,
            read=email.read,
            created_at=email.created_at,
        )


class EmailsResponse(BaseModel):
    emails: list[EmailOut]
