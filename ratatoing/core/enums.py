"""Ranks, lifecycle statuses and the job set shared by models, schemas and services."""

from enum import Enum


class Rank(str, Enum):
    """
    User rank, ordered from lowest to highest.

    Comparison follows declaration order (Nibbler < Banson), not string order.
    """

    NIBBLER = "Nibbler"
    CHEESE_GUARD = "Cheese Guard"
    ELITE_NIBBLER = "Elite Nibbler"
    BANSON = "Banson"

    @property
    def level(self) -> int:
        return _RANK_ORDER.index(self)

    @classmethod
    def top(cls) -> "Rank":
        return _RANK_ORDER[-1]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return self.level < other.level

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return self.level <= other.level

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return self.level > other.level

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return self.level >= other.level


_RANK_ORDER: tuple[Rank, ...] = tuple(Rank)


class UserStatus(str, Enum):
    """User lifecycle: pending -> active | banned. Both outcomes are terminal."""

    PENDING = "pending"
    ACTIVE = "active"
    BANNED = "banned"


class ApplicationStatus(str, Enum):
    """Job application lifecycle: pending -> approved | rejected."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Job(str, Enum):
    ARCADE_MANAGER = "Arcade Manager"
    MEDIA_CURATOR = "Media Curator"
    FORUM_MODERATOR = "Forum Moderator"
    IMMIGRANTS_OFFICER = "Immigrants Officer"


class TaskStatus(str, Enum):
    TEMPLATE = "template"
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TransactionType(str, Enum):
    TRANSFER = "transfer"
    ADMIN = "admin"
    PAYOUT = "payout"
    PURCHASE = "purchase"


class ShopItemStatus(str, Enum):
    """available -> sold -> reselling -> sold ... An item is on sale while available or reselling."""

    AVAILABLE = "available"
    SOLD = "sold"
    RESELLING = "reselling"

    @classmethod
    def on_sale(cls) -> tuple["ShopItemStatus", ...]:
        return (cls.AVAILABLE, cls.RESELLING)


class EntityKind(str, Enum):
    """Record kinds that go through the approval workflow."""

    USERS = "users"
    JOBS = "jobs"


RANK_VALUES: frozenset[str] = frozenset(r.value for r in Rank)
USER_STATUS_VALUES: frozenset[str] = frozenset(s.value for s in UserStatus)
APPLICATION_STATUS_VALUES: frozenset[str] = frozenset(s.value for s in ApplicationStatus)
JOB_VALUES: frozenset[str] = frozenset(j.value for j in Job)
TASK_STATUS_VALUES: frozenset[str] = frozenset(s.value for s in TaskStatus)
TRANSACTION_TYPE_VALUES: frozenset[str] = frozenset(t.value for t in TransactionType)
SHOP_ITEM_STATUS_VALUES: frozenset[str] = frozenset(s.value for s in ShopItemStatus)


def sql_in_list(values: frozenset[str]) -> str:
    """Render values as a sorted SQL IN list for CHECK constraints."""
    return ", ".join(f"'{v}'" for v in sorted(values))
