"""SQLAlchemy ORM models."""

from ratatoing.models.base import Base
from ratatoing.models.email import Email
from ratatoing.models.job_application import JobApplication
from ratatoing.models.payout import Payout
from ratatoing.models.shop_item import ShopItem
from ratatoing.models.task import Task
from ratatoing.models.transaction import Transaction
from ratatoing.models.user import User

__all__ = ["Base", "Email", "JobApplication", "Payout", "ShopItem", "Task", "Transaction", "User"]
