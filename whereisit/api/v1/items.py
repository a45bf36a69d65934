"""
Items API Endpoints
CRUD, listings, consumption and bulk operations for household items.

Static paths (/search, /expiring, /bulk-*, ...) are declared before
/{item_id} so they are not captured by it.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from whereisit.api.v1.deps import get_current_user, get_household_id, get_optional_household_id
from whereisit.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from whereisit.db.session import get_db
from whereisit.models.user import User
from whereisit.schemas.consumption import (
    ConsumeRequest,
    ConsumeResponse,
    ConsumptionForecast,
    LowStockPage,
)
from whereisit.schemas.item import (
    BulkAddTagsRequest,
    BulkCountResponse,
    BulkDeleteRequest,
    BulkUpdateLocationRequest,
    ConfirmResponse,
    FavoriteResponse,
    ItemBatchCreate,
    ItemBatchResponse,
    ItemCreate,
    ItemPage,
    ItemResponse,
    ItemUpdate,
)
from whereisit.services import bulk_service
from whereisit.services.consumption_service import ConsumptionService
from whereisit.services.item_service import ItemService


router = APIRouter(prefix="/items")


def _page(items: list, total: int, offset: int) -> ItemPage:
    return ItemPage(
        items=[ItemResponse.model_validate(item) for item in items],
        total=total,
        has_more=offset + len(items) < total
    )


# ============================================================================
# Create
# ============================================================================

@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    data: ItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    household_id: int = Depends(get_household_id),
):
    item = ItemService.create_item(db, household_id, current_user.id, data)
    db.commit()
    db.refresh(item)
    return item


@router.post("/batch", response_model=ItemBatchResponse, status_code=status.HTTP_201_CREATED)
def batch_create_items(
    data: ItemBatchCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    household_id: int = Depends(get_household_id),
):
    """Create several items in one transaction."""
    items = ItemService.batch_create(db, household_id, current_user.id, data.items)
    db.commit()
    for item in items:
        db.refresh(item)
    return ItemBatchResponse(
        items=[ItemResponse.model_validate(item) for item in items],
        count=len(items)
    )


# ============================================================================
# Listings
# ============================================================================

@router.get("/search", response_model=ItemPage)
def search_items(
    query: str = Query(..., min_length=1, description="Text to look for in name, description or tags"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    items, total = ItemService.search(db, household_id, query, limit, offset)
    return _page(items, total, offset)


@router.get("/expiring", response_model=ItemPage)
def get_expiring_items(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    items, total = ItemService.get_expiring(db, household_id, limit, offset)
    return _page(items, total, offset)


@router.get("/favorites", response_model=ItemPage)
def get_favorite_items(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    items, total = ItemService.get_favorites(db, household_id, limit, offset)
    return _page(items, total, offset)


@router.get("/recent", response_model=ItemPage)
def get_recent_items(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    items, total = ItemService.get_recent(db, household_id, limit, offset)
    return _page(items, total, offset)


@router.get("/needs-confirmation", response_model=ItemPage)
def get_items_needing_confirmation(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    items, total = ItemService.get_needs_confirmation(db, household_id, limit, offset)
    return _page(items, total, offset)


@router.get("/low-stock", response_model=LowStockPage)
def get_low_stock_items(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    """Items expected to run out within a week, based on consumption history."""
    items, total = ConsumptionService.get_low_stock(db, household_id, limit, offset)
    return LowStockPage(items=items, total=total, has_more=offset + len(items) < total)


# ============================================================================
# Bulk operations
# ============================================================================

@router.post("/bulk-add-tags", response_model=BulkCountResponse)
def bulk_add_tags(
    data: BulkAddTagsRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    count = bulk_service.bulk_merge_tags(db, current_user.id, data.item_ids, data.tags)
    db.commit()
    return BulkCountResponse(count=count)


@router.post("/bulk-delete", status_code=status.HTTP_204_NO_CONTENT)
def bulk_delete(
    data: BulkDeleteRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    bulk_service.bulk_delete(db, current_user.id, data.item_ids)
    db.commit()


@router.post("/bulk-update-location", response_model=BulkCountResponse)
def bulk_update_location(
    data: BulkUpdateLocationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    count = bulk_service.bulk_relocate(
        db,
        current_user.id,
        data.item_ids,
        data.location_id,
        data.container_id
    )
    db.commit()
    return BulkCountResponse(count=count)


# ============================================================================
# Single item
# ============================================================================

@router.get("/{item_id}", response_model=ItemResponse)
def get_item(
    item_id: int,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    return ItemService.require_item(db, item_id, household_id)


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: int,
    data: ItemUpdate,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    """Partial update: only fields present in the body are changed."""
    item = ItemService.update_item(db, item_id, household_id, data)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    ItemService.delete_item(db, item_id, household_id)
    db.commit()


@router.post("/{item_id}/favorite", response_model=FavoriteResponse)
def toggle_favorite(
    item_id: int,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    item = ItemService.toggle_favorite(db, item_id, household_id)
    is_favorite = item.is_favorite
    db.commit()
    return FavoriteResponse(is_favorite=is_favorite)


@router.post("/{item_id}/confirm", response_model=ConfirmResponse)
def confirm_item_location(
    item_id: int,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    item = ItemService.confirm_location(db, item_id, household_id)
    confirmed_at = item.last_confirmed_at
    db.commit()
    return ConfirmResponse(last_confirmed_at=confirmed_at)


@router.post("/{item_id}/consume", response_model=ConsumeResponse)
def consume_item(
    item_id: int,
    data: ConsumeRequest,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    """Subtract from the quantity and record the event, in one transaction."""
    new_quantity = ConsumptionService.record_consumption(db, item_id, household_id, data.consumed_quantity)
    db.commit()
    return ConsumeResponse(new_quantity=new_quantity)


@router.get("/{item_id}/consumption-history", response_model=ConsumptionForecast)
def get_consumption_history(
    item_id: int,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    return ConsumptionService.get_consumption_forecast(db, item_id, household_id)
