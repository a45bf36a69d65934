"""
Containers API Endpoints
CRUD operations for containers (shelves, boxes, bins inside a location).
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional

from whereisit.api.v1.deps import get_current_user, get_household_id, get_optional_household_id
from whereisit.db.session import get_db
from whereisit.models.user import User
from whereisit.schemas.container import (
    ContainerCreate,
    ContainerUpdate,
    ContainerResponse,
    ContainerListResponse,
)
from whereisit.schemas.item import ItemListResponse, ItemResponse
from whereisit.services.container_service import ContainerService
from whereisit.services.item_service import ItemService


router = APIRouter(prefix="/containers")


@router.get("", response_model=ContainerListResponse)
def get_containers(
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    containers = ContainerService.get_containers(db, household_id)
    return ContainerListResponse(containers=[ContainerResponse.model_validate(c) for c in containers])


@router.post("", response_model=ContainerResponse, status_code=status.HTTP_201_CREATED)
def create_container(
    data: ContainerCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    household_id: int = Depends(get_household_id),
):
    container = ContainerService.create_container(db, household_id, current_user.id, data)
    db.commit()
    db.refresh(container)
    return container


@router.put("/{container_id}", response_model=ContainerResponse)
def update_container(
    container_id: int,
    data: ContainerUpdate,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    container = ContainerService.update_container(db, container_id, household_id, data)
    db.commit()
    db.refresh(container)
    return container


@router.delete("/{container_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_container(
    container_id: int,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    ContainerService.delete_container(db, container_id, household_id)
    db.commit()


@router.get("/{container_id}/items", response_model=ItemListResponse)
def get_container_items(
    container_id: int,
    db: Session = Depends(get_db),
    household_id: Optional[int] = Depends(get_optional_household_id),
):
    items = ItemService.list_by_container(db, container_id, household_id)
    return ItemListResponse(items=[ItemResponse.model_validate(i) for i in items])
