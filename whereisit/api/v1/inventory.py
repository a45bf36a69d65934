"""
Inventory API Endpoints
Nested location -> container -> item view of the caller's household.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional

from whereisit.api.v1.deps import get_optional_household_id
from whereisit.db.session import get_db
from whereisit.schemas.inventory import InventoryTree
from whereisit.services.inventory_service import InventoryService


router = APIRouter(prefix="/inventory")


@router.get("/tree", response_model=InventoryTree)
def get_inventory_tree(
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    """Full inventory tree; empty when the caller has no household yet."""
    return InventoryService.get_inventory_tree(db, household_id)
