"""
Location Schemas
Pydantic models for Location API request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class LocationCreate(BaseModel):
    name: str = Field(..., max_length=255, description="Location name")


class LocationUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)


class LocationResponse(BaseModel):
    id: int
    household_id: int
    user_id: Optional[str] = None
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LocationListResponse(BaseModel):
    locations: list[LocationResponse]
