"""Pydantic request/response schemas."""

from ratatoing.schemas.approvals import ApprovalQueueResponse
from ratatoing.schemas.auth import CurrentUser, LoginRequest, RegisterRequest, TokenResponse
from ratatoing.schemas.bank import (
    BalanceResponse,
    GrantRequest,
    TransactionOut,
    TransactionsResponse,
    TransferRequest,
)
from ratatoing.schemas.emails import EmailOut, EmailsResponse, SendEmailRequest
from ratatoing.schemas.health import HealthResponse
from ratatoing.schemas.jobs import (
    JobApplicationOut,
    JobApplicationRequest,
    JobApplicationsResponse,
)
from ratatoing.schemas.shop import ResellRequest, ShopItemCreateRequest, ShopItemOut, ShopItemsResponse
from ratatoing.schemas.tasks import (
    PayoutOut,
    PayoutRequest,
    PayoutResponse,
    TaskCreateRequest,
    TaskOut,
    TaskSpawnRequest,
    TasksResponse,
)
from ratatoing.schemas.users import UserOut, UsersListResponse

__all__ = [
    "ApprovalQueueResponse",
    "BalanceResponse",
    "CurrentUser",
    "EmailOut",
    "EmailsResponse",
    "GrantRequest",
    "HealthResponse",
    "JobApplicationOut",
    "JobApplicationRequest",
    "JobApplicationsResponse",
    "LoginRequest",
    "PayoutOut",
    "PayoutRequest",
    "PayoutResponse",
    "RegisterRequest",
    "ResellRequest",
    "SendEmailRequest",
    "ShopItemCreateRequest",
    "ShopItemOut",
    "ShopItemsResponse",
    "TaskCreateRequest",
    "TaskOut",
    "TaskSpawnRequest",
    "TasksResponse",
    "TokenResponse",
    "TransactionOut",
    "TransactionsResponse",
    "TransferRequest",
    "UserOut",
    "UsersListResponse",
]
