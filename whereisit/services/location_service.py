"""
Location Service - Business Logic Layer
Handles all business logic for location management.
"""

from sqlalchemy.orm import Session
from sqlalchemy import and_
from typing import Optional

from whereisit.core.exceptions import InvalidArgument, NotFound
from whereisit.models.location import Location
from whereisit.models.container import Container
from whereisit.models.item import Item
from whereisit.schemas.location import LocationCreate, LocationUpdate


class LocationService:

    @staticmethod
    def get_locations(db: Session, household_id: Optional[int]) -> list[Location]:
        if household_id is None:
            return []
        return db.query(Location).filter(
            Location.household_id == household_id
        ).order_by(Location.name.asc(), Location.id.asc()).all()

    @staticmethod
    def get_location_by_id(db: Session, location_id: int, household_id: Optional[int]) -> Optional[Location]:
        if household_id is None:
            return None
        return db.query(Location).filter(
            and_(
                Location.id == location_id,
                Location.household_id == household_id
            )
        ).first()

    @staticmethod
    def require_location(db: Session, location_id: int, household_id: Optional[int]) -> Location:
        location = LocationService.get_location_by_id(db, location_id, household_id)
        if not location:
            raise NotFound("Location not found")
        return location

    @staticmethod
    def create_location(db: Session, household_id: int, user_id: str, data: LocationCreate) -> Location:
        name = data.name.strip()
        if not name:
            raise InvalidArgument("Location name cannot be empty")

        location = Location(
            household_id=household_id,
            user_id=user_id,
            name=name,
        )
        db.add(location)
        db.flush()
        return location

    @staticmethod
    def update_location(db: Session, location_id: int, household_id: Optional[int], data: LocationUpdate) -> Location:
        location = LocationService.require_location(db, location_id, household_id)

        update_data = data.model_dump(exclude_unset=True)
        if "name" in update_data:
            name = (update_data["name"] or "").strip()
            if not name:
                raise InvalidArgument("Location name cannot be empty")
            location.name = name

        db.flush()
        return location

    @staticmethod
    def delete_location(db: Session, location_id: int, household_id: Optional[int]) -> None:
        """
        Delete a location.

        Containers and items that referenced it stay in the household with
        their location cleared; items then show up as unassigned or under
        their container.
        """
        location = LocationService.require_location(db, location_id, household_id)

        db.query(Container).filter(
            and_(
                Container.household_id == location.household_id,
                Container.location_id == location.id
            )
        ).update({Container.location_id: None}, synchronize_session=False)

        db.query(Item).filter(
            and_(
                Item.household_id == location.household_id,
                Item.location_id == location.id
            )
        ).update({Item.location_id: None}, synchronize_session=False)

        db.delete(location)
        db.flush()
