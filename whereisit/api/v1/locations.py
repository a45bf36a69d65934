"""
Locations API Endpoints
CRUD operations for locations (rooms and places within a household).
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional

from whereisit.api.v1.deps import get_current_user, get_household_id, get_optional_household_id
from whereisit.db.session import get_db
from whereisit.models.user import User
from whereisit.schemas.container import ContainerListResponse, ContainerResponse
from whereisit.schemas.item import ItemListResponse, ItemResponse
from whereisit.schemas.location import (
    LocationCreate,
    LocationUpdate,
    LocationResponse,
    LocationListResponse,
)
from whereisit.services.container_service import ContainerService
from whereisit.services.item_service import ItemService
from whereisit.services.location_service import LocationService


router = APIRouter(prefix="/locations")


@router.get("", response_model=LocationListResponse)
def get_locations(
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    """Get all locations of the caller's household, by name."""
    locations = LocationService.get_locations(db, household_id)
    return LocationListResponse(locations=[LocationResponse.model_validate(loc) for loc in locations])


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
def create_location(
    data: LocationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    household_id: int = Depends(get_household_id),
):
    location = LocationService.create_location(db, household_id, current_user.id, data)
    db.commit()
    db.refresh(location)
    return location


@router.put("/{location_id}", response_model=LocationResponse)
def update_location(
    location_id: int,
    data: LocationUpdate,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    location = LocationService.update_location(db, location_id, household_id, data)
    db.commit()
    db.refresh(location)
    return location


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_location(
    location_id: int,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    """Delete a location. Its containers and items are kept, unlinked."""
    LocationService.delete_location(db, location_id, household_id)
    db.commit()


@router.get("/{location_id}/containers", response_model=ContainerListResponse)
def get_location_containers(
    location_id: int,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    containers = ContainerService.get_containers_by_location(db, location_id, household_id)
    return ContainerListResponse(containers=[ContainerResponse.model_validate(c) for c in containers])


@router.get("/{location_id}/items", response_model=ItemListResponse)
def get_location_items(
    location_id: int,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    """Every item placed in the location, in a container or not. Newest first."""
    items = ItemService.list_by_location(db, location_id, household_id)
    return ItemListResponse(items=[ItemResponse.model_validate(i) for i in items])
