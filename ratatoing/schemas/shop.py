"""Pydantic schemas for the shop and member inventories."""

from datetime import datetime

from pydantic import BaseModel, Field

from ratatoing.models import ShopItem

MAX_PRICE = 1_000_000


class ShopItemCreateRequest(BaseModel):
    """Body for POST /shop."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    price: int = Field(..., gt=0, le=MAX_PRICE, description="Price in pocket sniffles.")


class ResellRequest(BaseModel):
    """Body for POST /inventory/{id}/resell. Must be at least what the owner paid."""

    price: int = Field(..., gt=0, le=MAX_PRICE)


class ShopItemOut(BaseModel):
    id: int
    seller_id: int
    seller_username: str | None = None
    buyer_id: int | None = None
    title: str
    description: str | None = None
    price: int
    status: str
    original_price: int | None = None
    previous_owner_id: int | None = None
    created_at: datetime | None = None
    sold_at: datetime | None = None

    @classmethod
    def from_model(cls, item: ShopItem) -> "ShopItemOut":
        return cls(
            id=item.id,
            seller_id=item.seller_id,
            seller_username=item.seller.username if item.seller is not None else None,
            buyer_id=item.buyer_id,
            title=item.title,
            description=item.description,
            price=item.price,
            status=item.status,
            original_price=item.original_price,
            previous_owner_id=item.previous_owner_id,
            created_at=item.created_at,
            sold_at=item.sold_at,
        )


class ShopItemsResponse(BaseModel):
    items: list[ShopItemOut]
