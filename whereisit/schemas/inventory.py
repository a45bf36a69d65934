"""
Inventory Tree Schemas
Nested location -> container -> item view of a household.

The "Unassigned" location and container use id -1; real ids are always
positive.
"""

from pydantic import BaseModel
from typing import Optional

from whereisit.schemas.item import ItemResponse


class TreeContainer(BaseModel):
    id: int
    name: str
    location_id: Optional[int] = None
    photo_url: Optional[str] = None
    items: list[ItemResponse] = []


class TreeLocation(BaseModel):
    id: int
    name: str
    containers: list[TreeContainer] = []
    items: list[ItemResponse] = []  # Items placed in the location but in no container


class InventoryTree(BaseModel):
    locations: list[TreeLocation] = []
    unassigned_items: list[ItemResponse] = []
