"""
Item Schemas
Pydantic models for Item API request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, date


class ItemCreate(BaseModel):
    """Schema for creating an item"""
    name: str = Field(..., max_length=255, description="Item name, must not be blank")
    location_id: Optional[int] = Field(None, description="Location ID (same household)")
    container_id: Optional[int] = Field(None, description="Container ID (same household)")
    description: Optional[str] = Field(None, description="Description")
    photo_url: Optional[str] = Field(None, max_length=1000, description="Photo URL")
    thumbnail_url: Optional[str] = Field(None, max_length=1000, description="Thumbnail URL")
    brand: Optional[str] = Field(None, max_length=255)
    color: Optional[str] = Field(None, max_length=100)
    size: Optional[str] = Field(None, max_length=100)
    quantity: int = Field(1, ge=0, description="Quantity on hand")
    min_quantity: Optional[int] = Field(None, ge=0, description="Shopping list threshold")
    expiration_date: Optional[date] = Field(None, description="Expiration date")
    category: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, description="Notes")
    tags: list[str] = Field(default_factory=list, description="Tags")
    is_favorite: bool = Field(False, description="Favorite flag")


class ItemUpdate(BaseModel):
    """
    Schema for updating an item.

    Only fields present in the body are applied. Nullable fields accept an
    explicit null to clear them (for instance container_id: null takes the
    item out of its container).
    """
    name: Optional[str] = Field(None, max_length=255)
    location_id: Optional[int] = None
    container_id: Optional[int] = None
    description: Optional[str] = None
    photo_url: Optional[str] = Field(None, max_length=1000)
    thumbnail_url: Optional[str] = Field(None, max_length=1000)
    brand: Optional[str] = Field(None, max_length=255)
    color: Optional[str] = Field(None, max_length=100)
    size: Optional[str] = Field(None, max_length=100)
    quantity: Optional[int] = Field(None, ge=0)
    min_quantity: Optional[int] = Field(None, ge=0)
    expiration_date: Optional[date] = None
    category: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    tags: Optional[list[str]] = None
    is_favorite: Optional[bool] = None


class ItemResponse(BaseModel):
    """Schema for item response"""
    id: int
    household_id: int
    user_id: Optional[str] = None
    location_id: Optional[int] = None
    container_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    photo_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    brand: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    quantity: int
    min_quantity: Optional[int] = None
    expiration_date: Optional[date] = None
    category: Optional[str] = None
    notes: Optional[str] = None
    tags: list[str] = []
    is_favorite: bool = False
    created_at: datetime
    updated_at: datetime
    last_confirmed_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ItemListResponse(BaseModel):
    items: list[ItemResponse]


class ItemPage(BaseModel):
    """One page of a filtered item listing."""
    items: list[ItemResponse]
    total: int
    has_more: bool


class ItemBatchCreate(BaseModel):
    """Items detected on a shelf photo, or entered in one go."""
    items: list[ItemCreate] = Field(..., min_length=1, description="Items to create")


class ItemBatchResponse(BaseModel):
    items: list[ItemResponse]
    count: int


class FavoriteResponse(BaseModel):
    is_favorite: bool


class ConfirmResponse(BaseModel):
    success: bool = True
    last_confirmed_at: datetime


# ============================================================================
# Bulk operations
# ============================================================================

class BulkAddTagsRequest(BaseModel):
    item_ids: list[int] = Field(..., description="Items to tag")
    tags: list[str] = Field(..., description="Tags merged into each item")


class BulkDeleteRequest(BaseModel):
    item_ids: list[int] = Field(..., description="Items to delete")


class BulkUpdateLocationRequest(BaseModel):
    item_ids: list[int] = Field(..., description="Items to move")
    location_id: Optional[int] = Field(..., description="Target location, null to unassign")
    container_id: Optional[int] = Field(None, description="Target container, defaults to none")


class BulkCountResponse(BaseModel):
    count: int
