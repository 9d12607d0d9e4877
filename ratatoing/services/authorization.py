"""Rank-based authority: the single predicate every moderation action goes through."""

import logging

from ratatoing.core.enums import Rank
from ratatoing.schemas.auth import CurrentUser
from ratatoing.services.errors import UnauthorizedError

logger = logging.getLogger(__name__)


def _as_rank(rank: Rank | str | None) -> Rank | None:
    if isinstance(rank, Rank):
        return rank
    try:
        return Rank(rank)
    except ValueError:
        return None


def has_authority(rank: Rank | str | None) -> bool:
    """True only for the highest rank. Unknown or missing ranks never qualify."""
    return _as_rank(rank) is Rank.top()


def ensure_authority(actor: CurrentUser, action: str) -> None:
    """Raise UnauthorizedError unless actor holds administrative authority."""
    if has_authority(actor.rank):
        return
    rank = actor.rank.value if isinstance(actor.rank, Rank) else actor.rank
    logger.warning(
        "Refused moderation action",
        extra={"action": action, "actor_id": actor.id, "actor_rank": rank},
    )
    raise UnauthorizedError(f"Rank {rank!r} may not {action.replace('_', ' ')}.")
