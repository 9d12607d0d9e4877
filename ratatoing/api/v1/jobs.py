"""Jobs endpoints: apply for a job, follow own applications, quit."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ratatoing.api.v1.auth import get_current_user
from ratatoing.api.v1.errors import to_http_exception
from ratatoing.core.database import get_db
from ratatoing.schemas.auth import CurrentUser
from ratatoing.schemas.jobs import JobApplicationOut, JobApplicationRequest, JobApplicationsResponse
from ratatoing.schemas.users import UserOut
from ratatoing.services.errors import WorkflowError
from ratatoing.services.jobs import list_own_applications, quit_job, submit_application

router = APIRouter()


@router.post("/apply", response_model=JobApplicationOut, status_code=201)
def post_apply(
    body: JobApplicationRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> JobApplicationOut:
    """
    File a job application. It stays pending until a Banson approves or rejects it.
    Members who already hold a job, or already have a pending application, are refused.
    """
    try:
        application = submit_application(db, current_user, body.job, body.description)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return JobApplicationOut.from_model(application)


@router.get("/my-applications", response_model=JobApplicationsResponse)
def get_my_applications(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> JobApplicationsResponse:
    applications = list_own_applications(db, current_user)
    return JobApplicationsResponse(
        applications=[JobApplicationOut.from_model(a) for a in applications]
    )


@router.post("/quit", response_model=UserOut)
def post_quit(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserOut:
    try:
        user = quit_job(db, current_user)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return UserOut.model_validate(user)
