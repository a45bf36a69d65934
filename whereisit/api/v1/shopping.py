"""
Shopping List API Endpoints
Shared household shopping list.

Every endpoint provisions the caller's household if needed, so the list is
usable from the very first request.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from whereisit.api.v1.deps import get_current_user, get_household_id
from whereisit.db.session import get_db
from whereisit.models.user import User
from whereisit.schemas.shopping import (
    ShoppingItemCreate,
    ShoppingItemUpdate,
    ShoppingItemResponse,
    ShoppingListResponse,
    ShoppingLowStockResponse,
)
from whereisit.services.shopping_service import ShoppingService


router = APIRouter(prefix="/shopping")


@router.get("", response_model=ShoppingListResponse)
def get_shopping_list(
    db: Session = Depends(get_db),
    household_id: int = Depends(get_household_id),
):
    entries = ShoppingService.get_list(db, household_id)
    return ShoppingListResponse(items=[ShoppingItemResponse.from_model(entry) for entry in entries])


@router.post("", response_model=ShoppingItemResponse, status_code=status.HTTP_201_CREATED)
def add_shopping_item(
    data: ShoppingItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    household_id: int = Depends(get_household_id),
):
    entry = ShoppingService.add_item(db, household_id, current_user.id, data)
    db.commit()
    db.refresh(entry)
    return ShoppingItemResponse.from_model(entry)


# Declared before /{entry_id} so the path is not captured by it
@router.get("/low-stock", response_model=ShoppingLowStockResponse)
def get_low_stock_suggestions(
    db: Session = Depends(get_db),
    household_id: int = Depends(get_household_id),
):
    """Items at or below their minimum quantity, empty ones first."""
    return ShoppingLowStockResponse(items=ShoppingService.get_low_stock_items(db, household_id))


@router.patch("/{entry_id}", response_model=ShoppingItemResponse)
def update_shopping_item(
    entry_id: int,
    data: ShoppingItemUpdate,
    db: Session = Depends(get_db),
    household_id: int = Depends(get_household_id),
):
    entry = ShoppingService.update_item(db, entry_id, household_id, data)
    db.commit()
    db.refresh(entry)
    return ShoppingItemResponse.from_model(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_shopping_item(
    entry_id: int,
    db: Session = Depends(get_db),
    household_id: int = Depends(get_household_id),
):
    ShoppingService.delete_item(db, entry_id, household_id)
    db.commit()
