"""Internal e-mail endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ratatoing.api.v1.auth import get_current_user
from ratatoing.api.v1.errors import to_http_exception
from ratatoing.core.database import get_db
from ratatoing.schemas.auth import CurrentUser
from ratatoing.schemas.emails import EmailOut, EmailsResponse, SendEmailRequest
from ratatoing.services import emails
from ratatoing.services.errors import WorkflowError

router = APIRouter()


@router.post("", response_model=EmailOut, status_code=201)
def post_email(
    body: SendEmailRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> EmailOut:
    try:
        email = emails.send_email(
            db, current_user, body.recipient_username, body.subject, body.body
        )
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return EmailOut.from_model(email)


@router.get("/inbox", response_model=EmailsResponse)
def get_inbox(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> EmailsResponse:
    return EmailsResponse(emails=[EmailOut.from_model(e) for e in emails.list_inbox(db, current_user)])


@router.get("/sent", response_model=EmailsResponse)
def get_sent(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> EmailsResponse:
    return EmailsResponse(emails=[EmailOut.from_model(e) for e in emails.list_sent(db, current_user)])


@router.get("/{email_id}", response_model=EmailOut)
def get_email(
    email_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> EmailOut:
    """Open an e-mail. The recipient opening it marks it read."""
    try:
        email = emails.read_email(db, current_user, email_id)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return EmailOut.from_model(email)


@router.patch("/{email_id}/read", response_model=EmailOut)
def patch_read(
    email_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> EmailOut:
    try:
        email = emails.mark_read(db, current_user, email_id)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return EmailOut.from_model(email)


@router.delete("/{email_id}", status_code=204)
def delete_email(
    email_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> Response:
    try:
        emails.delete_email(db, current_user, email_id)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return Response(status_code=204)
