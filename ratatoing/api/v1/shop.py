"""Shop endpoints: browse, list, buy and withdraw items; the caller's inventory and resale."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ratatoing.api.v1.auth import get_current_user
from ratatoing.api.v1.errors import to_http_exception
from ratatoing.core.database import get_db
from ratatoing.schemas.auth import CurrentUser
from ratatoing.schemas.shop import ResellRequest, ShopItemCreateRequest, ShopItemOut, ShopItemsResponse
from ratatoing.services import shop
from ratatoing.services.errors import WorkflowError

router = APIRouter()
inventory_router = APIRouter()


@router.get("", response_model=ShopItemsResponse)
def get_items_for_sale(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ShopItemsResponse:
    items = shop.list_items_for_sale(db)
    return ShopItemsResponse(items=[ShopItemOut.from_model(i) for i in items])


@router.post("", response_model=ShopItemOut, status_code=201)
def post_item(
    body: ShopItemCreateRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ShopItemOut:
    try:
        item = shop.create_item(
            db, current_user, title=body.title, price=body.price, description=body.description
        )
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return ShopItemOut.from_model(item)


@router.get("/user/{user_id}", response_model=ShopItemsResponse)
def get_seller_items(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ShopItemsResponse:
    """Everything a member has listed, sold or not."""
    items = shop.list_seller_items(db, user_id)
    return ShopItemsResponse(items=[ShopItemOut.from_model(i) for i in items])


@router.post("/{item_id}/purchase", response_model=ShopItemOut)
def post_purchase(
    item_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ShopItemOut:
    """Buy an item. 422 when funds are short or the item is yours; 409 when it is already sold."""
    try:
        item = shop.purchase_item(db, current_user, item_id)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return ShopItemOut.from_model(item)


@router.delete("/{item_id}", status_code=204)
def delete_item(
    item_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> Response:
    try:
        shop.withdraw_item(db, current_user, item_id)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return Response(status_code=204)


@inventory_router.get("", response_model=ShopItemsResponse)
def get_inventory(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ShopItemsResponse:
    items = shop.list_inventory(db, current_user)
    return ShopItemsResponse(items=[ShopItemOut.from_model(i) for i in items])


@inventory_router.post("/{item_id}/resell", response_model=ShopItemOut)
def post_resell(
    item_id: int,
    body: ResellRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ShopItemOut:
    """Put an owned item back on sale at no less than what you paid for it."""
    try:
        item = shop.resell_item(db, current_user, item_id, body.price)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return ShopItemOut.from_model(item)
