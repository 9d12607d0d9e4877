"""Health check endpoint with optional database connectivity check."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ratatoing.core.config import settings
from ratatoing.core.database import check_db_connected, get_db
from ratatoing.core.enums import UserStatus
from ratatoing.models import User
from ratatoing.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status, database connectivity and the size of the
    registration queue. Used by load balancers and monitoring.
    """
    if not check_db_connected(db):
        return HealthResponse(status="ok", environment=settings.APP_ENV, database="disconnected")

    pending_users = db.query(User).filter(User.status == UserStatus.PENDING.value).count()
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database="connected",
        pending_users=pending_users,
    )
