"""
Container Schemas
Pydantic models for Container API request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ContainerCreate(BaseModel):
    name: str = Field(..., max_length=255, description="Container name")
    location_id: Optional[int] = Field(None, description="Location ID (same household)")
    photo_url: Optional[str] = Field(None, max_length=1000, description="Photo URL")


class ContainerUpdate(BaseModel):
    """Absent fields are left alone; explicit null clears location_id or photo_url."""
    name: Optional[str] = Field(None, max_length=255)
    location_id: Optional[int] = None
    photo_url: Optional[str] = Field(None, max_length=1000)


class ContainerResponse(BaseModel):
    id: int
    household_id: int
    user_id: Optional[str] = None
    location_id: Optional[int] = None
    name: str
    photo_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ContainerListResponse(BaseModel):
    containers: list[ContainerResponse]
