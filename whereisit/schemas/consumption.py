"""
Consumption Schemas
Pydantic models for consumption recording, history and forecasts.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ConsumeRequest(BaseModel):
    # Validated by the service so that zero and negatives answer 400
    consumed_quantity: int = Field(..., description="Units consumed, must be positive")


class ConsumeResponse(BaseModel):
    success: bool = True
    new_quantity: int


class ConsumptionEntryResponse(BaseModel):
    id: int
    quantity_remaining: int
    consumed_quantity: int
    recorded_at: datetime

    model_config = {"from_attributes": True}


class ConsumptionForecast(BaseModel):
    """
    History plus the derived rate.

    daily_rate, reorder_point and days_until_empty are null until at least
    two entries span a positive amount of time.
    """
    history: list[ConsumptionEntryResponse]
    initial_quantity: int
    daily_rate: Optional[float] = None
    reorder_point: Optional[int] = None
    days_until_empty: Optional[int] = None


class LowStockItem(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    photo_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    quantity: int
    location_id: Optional[int] = None
    location_name: Optional[str] = None
    tags: list[str] = []
    is_favorite: bool = False
    reorder_point: int
    daily_rate: float
    days_until_empty: int


class LowStockPage(BaseModel):
    items: list[LowStockItem]
    total: int
    has_more: bool
