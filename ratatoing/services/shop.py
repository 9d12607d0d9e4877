"""Shop: members list items, buy them with pocket sniffles, and resell what they own.

A purchase is one unit of work: the item is claimed with a conditional UPDATE on its status,
then the price moves buyer -> seller through the bank primitives and a purchase row is
recorded. Any failure rolls the whole thing back.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from ratatoing.core.enums import ShopItemStatus, TransactionType
from ratatoing.models import ShopItem
from ratatoing.schemas.auth import CurrentUser
from ratatoing.services import bank
from ratatoing.services.authorization import has_authority
from ratatoing.services.errors import (
    ConstraintViolationError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

_ON_SALE = [s.value for s in ShopItemStatus.on_sale()]


def _load_item(session: Session, item_id: int) -> ShopItem:
    item = session.get(ShopItem, item_id)
    if item is None:
        raise NotFoundError("shop item", item_id)
    return item


def list_items_for_sale(session: Session) -> list[ShopItem]:
    """Available and resale items, newest first."""
    return (
        session.query(ShopItem)
        .filter(ShopItem.status.in_(_ON_SALE))
        .order_by(ShopItem.created_at.desc(), ShopItem.id.desc())
        .all()
    )


def list_seller_items(session: Session, user_id: int) -> list[ShopItem]:
    return (
        session.query(ShopItem)
        .filter(ShopItem.seller_id == user_id)
        .order_by(ShopItem.created_at.desc(), ShopItem.id.desc())
        .all()
    )


def list_inventory(session: Session, owner: CurrentUser) -> list[ShopItem]:
    """Items the caller bought and still owns."""
    return (
        session.query(ShopItem)
        .filter(
            ShopItem.buyer_id == owner.id,
            ShopItem.status == ShopItemStatus.SOLD.value,
        )
        .order_by(ShopItem.sold_at.desc(), ShopItem.id.desc())
        .all()
    )


def create_item(
    session: Session,
    seller: CurrentUser,
    *,
    title: str,
    price: int,
    description: str | None = None,
) -> ShopItem:
    title = title.strip()
    if not title:
        raise ConstraintViolationError("Title is required.")
    if price <= 0:
        raise ConstraintViolationError("Price must be a positive number.")

    item = ShopItem(
        seller_id=seller.id,
        title=title,
        description=description.strip() if description else None,
        price=price,
        status=ShopItemStatus.AVAILABLE.value,
    )
    session.add(item)
    session.commit()
    session.refresh(item)
    logger.info("Shop item listed", extra={"item_id": item.id, "seller_id": seller.id, "price": price})
    return item


def purchase_item(session: Session, buyer: CurrentUser, item_id: int) -> ShopItem:
    """
    Buy an item on sale. The buyer pays the listed price to the seller.

    Raises ConstraintViolationError for one's own item, InvalidStateError when the item is no
    longer on sale (including losing a race to another buyer) and InsufficientFundsError when
    the buyer cannot pay. Nothing changes on failure.
    """
    item = _load_item(session, item_id)
    if item.seller_id == buyer.id:
        raise ConstraintViolationError("You cannot buy your own item.")
    if item.status not in _ON_SALE:
        raise InvalidStateError(f"Shop item {item_id} is not for sale.", current_status=item.status)

    seller_id = item.seller_id
    price = item.price
    title = item.title

    try:
        claimed = (
            session.query(ShopItem)
            .filter(
                ShopItem.id == item_id,
                ShopItem.seller_id == seller_id,
                ShopItem.price == price,
                ShopItem.status.in_(_ON_SALE),
            )
            .update(
                {
                    "buyer_id": buyer.id,
                    "status": ShopItemStatus.SOLD.value,
                    "sold_at": datetime.now(UTC),
                    "original_price": price,
                },
                synchronize_session=False,
            )
        )
        if claimed != 1:
            raise InvalidStateError(f"Shop item {item_id} was just sold or changed.")
        bank.debit(session, buyer.id, price)
        bank.credit(session, seller_id, price)
        bank.record_transaction(
            session,
            sender_id=buyer.id,
            recipient_id=seller_id,
            amount=price,
            kind=TransactionType.PURCHASE,
            description=f"Purchase of {title}",
        )
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(
        "Shop item purchased",
        extra={"item_id": item_id, "buyer_id": buyer.id, "seller_id": seller_id, "price": price},
    )
    session.expire_all()
    return _load_item(session, item_id)


def resell_item(session: Session, owner: CurrentUser, item_id: int, price: int) -> ShopItem:
    """Put an owned item back on sale at no less than what the owner paid."""
    item = _load_item(session, item_id)
    if item.buyer_id != owner.id:
        raise UnauthorizedError("You can only resell items you own.")
    if item.status != ShopItemStatus.SOLD.value:
        raise InvalidStateError(f"Shop item {item_id} is already on sale.", current_status=item.status)
    floor = item.original_price or 0
    if price < floor:
        raise ConstraintViolationError(f"Resale price must be at least {floor}, what you paid.")
    if price <= 0:
        raise ConstraintViolationError("Price must be a positive number.")

    previous_seller = item.seller_id
    try:
        updated = (
            session.query(ShopItem)
            .filter(
                ShopItem.id == item_id,
                ShopItem.buyer_id == owner.id,
                ShopItem.status == ShopItemStatus.SOLD.value,
            )
            .update(
                {
                    "seller_id": owner.id,
                    "previous_owner_id": previous_seller,
                    "buyer_id": None,
                    "price": price,
                    "status": ShopItemStatus.RESELLING.value,
                    "sold_at": None,
                },
                synchronize_session=False,
            )
        )
        if updated != 1:
            raise InvalidStateError(f"Shop item {item_id} changed hands; reload and try again.")
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info("Shop item relisted", extra={"item_id": item_id, "seller_id": owner.id, "price": price})
    session.expire_all()
    return _load_item(session, item_id)


def withdraw_item(session: Session, actor: CurrentUser, item_id: int) -> None:
    """Take an unsold item off the shop. Only its seller or a Banson may."""
    item = _load_item(session, item_id)
    if item.seller_id != actor.id and not has_authority(actor.rank):
        logger.warning(
            "Shop withdrawal refused",
            extra={"item_id": item_id, "actor_id": actor.id},
        )
        raise UnauthorizedError("You can only remove your own items.")
    if item.status not in _ON_SALE:
        raise InvalidStateError(f"Shop item {item_id} has been sold.", current_status=item.status)

    try:
        deleted = (
            session.query(ShopItem)
            .filter(ShopItem.id == item_id, ShopItem.status.in_(_ON_SALE))
            .delete(synchronize_session=False)
        )
        if deleted != 1:
            raise InvalidStateError(f"Shop item {item_id} was just sold.")
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info("Shop item withdrawn", extra={"item_id": item_id, "actor_id": actor.id})
