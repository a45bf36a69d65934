"""
Shopping List Schemas
Pydantic models for the shared shopping list.
"""

from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime


class ShoppingItemCreate(BaseModel):
    item_name: str = Field(..., min_length=1, max_length=255, description="What to buy")
    quantity: int = Field(1, ge=1, description="How many")


class ShoppingItemUpdate(BaseModel):
    """At least one field is required; an empty body answers 400."""
    is_purchased: Optional[bool] = None
    quantity: Optional[int] = Field(None, ge=1)


class ShoppingItemResponse(BaseModel):
    id: int
    household_id: int
    item_name: str
    quantity: int
    is_purchased: bool
    added_by_user_id: Optional[str] = None
    added_by_email: Optional[str] = None
    added_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, entry) -> "ShoppingItemResponse":
        return cls(
            id=entry.id,
            household_id=entry.household_id,
            item_name=entry.item_name,
            quantity=entry.quantity,
            is_purchased=entry.is_purchased,
            added_by_user_id=entry.added_by_user_id,
            added_by_email=entry.added_by.email if entry.added_by else None,
            added_at=entry.created_at,
            updated_at=entry.updated_at,
        )


class ShoppingListResponse(BaseModel):
    items: list[ShoppingItemResponse]


class ShoppingLowStockItem(BaseModel):
    id: int
    name: str
    quantity: int
    min_quantity: int
    stock_status: Literal["low", "out"]
    location_name: Optional[str] = None


class ShoppingLowStockResponse(BaseModel):
    items: list[ShoppingLowStockItem]
