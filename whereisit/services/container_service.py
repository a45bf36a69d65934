"""
Container Service - Business Logic Layer
Handles all business logic for container management.

A container's location, when set, must belong to the same household.
"""

from sqlalchemy.orm import Session
from sqlalchemy import and_
from typing import Optional

from whereisit.core.exceptions import InvalidArgument, NotFound
from whereisit.models.container import Container
from whereisit.models.item import Item
from whereisit.schemas.container import ContainerCreate, ContainerUpdate
from whereisit.services.location_service import LocationService


class ContainerService:

    @staticmethod
    def get_containers(db: Session, household_id: Optional[int]) -> list[Container]:
        if household_id is None:
            return []
        return db.query(Container).filter(
            Container.household_id == household_id
        ).order_by(Container.name.asc(), Container.id.asc()).all()

    @staticmethod
    def get_containers_by_location(db: Session, location_id: int, household_id: Optional[int]) -> list[Container]:
        if household_id is None:
            return []
        return db.query(Container).filter(
            and_(
                Container.household_id == household_id,
                Container.location_id == location_id
            )
        ).order_by(Container.name.asc(), Container.id.asc()).all()

    @staticmethod
    def get_container_by_id(db: Session, container_id: int, household_id: Optional[int]) -> Optional[Container]:
        if household_id is None:
            return None
        return db.query(Container).filter(
            and_(
                Container.id == container_id,
                Container.household_id == household_id
            )
        ).first()

    @staticmethod
    def require_container(db: Session, container_id: int, household_id: Optional[int]) -> Container:
        container = ContainerService.get_container_by_id(db, container_id, household_id)
        if not container:
            raise NotFound("Container not found")
        return container

    @staticmethod
    def create_container(db: Session, household_id: int, user_id: str, data: ContainerCreate) -> Container:
        name = data.name.strip()
        if not name:
            raise InvalidArgument("Container name cannot be empty")

        if data.location_id is not None:
            LocationService.require_location(db, data.location_id, household_id)

        container = Container(
            household_id=household_id,
            user_id=user_id,
            location_id=data.location_id,
            name=name,
            photo_url=data.photo_url,
        )
        db.add(container)
        db.flush()
        return container

    @staticmethod
    def update_container(db: Session, container_id: int, household_id: Optional[int], data: ContainerUpdate) -> Container:
        container = ContainerService.require_container(db, container_id, household_id)

        update_data = data.model_dump(exclude_unset=True)

        if "name" in update_data:
            name = (update_data.pop("name") or "").strip()
            if not name:
                raise InvalidArgument("Container name cannot be empty")
            container.name = name

        if update_data.get("location_id") is not None:
            LocationService.require_location(db, update_data["location_id"], household_id)

        for field, value in update_data.items():
            setattr(container, field, value)

        db.flush()
        return container

    @staticmethod
    def delete_container(db: Session, container_id: int, household_id: Optional[int]) -> None:
        """Delete a container; its items keep their location and lose the container."""
        container = ContainerService.require_container(db, container_id, household_id)

        db.query(Item).filter(
            and_(
                Item.household_id == container.household_id,
                Item.container_id == container.id
            )
        ).update({Item.container_id: None}, synchronize_session=False)

        db.delete(container)
        db.flush()
