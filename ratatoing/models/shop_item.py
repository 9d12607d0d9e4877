"""ORM model for items traded between members in the shop."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from ratatoing.core.enums import SHOP_ITEM_STATUS_VALUES, ShopItemStatus, sql_in_list
from ratatoing.models.base import Base


class ShopItem(Base):
    """
    An item on sale, or owned by the member who bought it.

    seller_id is whoever currently offers the item; buyer_id is the current owner once sold.
    On resale the owner becomes the seller and the former seller moves to previous_owner_id.
    original_price is what the current owner paid, the floor for a resale price.
    """

    __tablename__ = "shop_items"
    __table_args__ = (
        CheckConstraint(f"status IN ({sql_in_list(SHOP_ITEM_STATUS_VALUES)})", name="ck_shop_items_status"),
        CheckConstraint("price > 0", name="ck_shop_items_price_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    seller_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    buyer_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Integer, nullable=False)
    status = Column(String(16), nullable=False, default=ShopItemStatus.AVAILABLE.value, index=True)
    original_price = Column(Integer, nullable=True)
    previous_owner_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    sold_at = Column(DateTime(timezone=True), nullable=True)

    seller = relationship("User", foreign_keys=[seller_id], lazy="joined")
