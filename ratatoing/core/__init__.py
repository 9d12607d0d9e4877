"""Core app configuration, database and shared enums."""

from ratatoing.core.config import get_settings, settings
from ratatoing.core.database import get_db
from ratatoing.core.enums import (
    ApplicationStatus,
    EntityKind,
    Job,
    Rank,
    ShopItemStatus,
    TaskStatus,
    TransactionType,
    UserStatus,
)

__all__ = [
    "ApplicationStatus",
    "EntityKind",
    "Job",
    "Rank",
    "ShopItemStatus",
    "TaskStatus",
    "TransactionType",
    "UserStatus",
    "get_db",
    "get_settings",
    "settings",
]
