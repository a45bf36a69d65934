"""
Item Service - Business Logic Layer
Handles all business logic for household items.

Every query filters by household id. An item id from another household
behaves exactly like a missing one.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from sqlalchemy import and_, or_, cast, String
from sqlalchemy.orm import Session, Query

from whereisit.core.constants import EXPIRING_WINDOW_DAYS, CONFIRMATION_STALE_DAYS
from whereisit.core.exceptions import InvalidArgument, NotFound
from whereisit.models.item import Item
from whereisit.schemas.item import ItemCreate, ItemUpdate
from whereisit.services.container_service import ContainerService
from whereisit.services.location_service import LocationService


def paginate(query: Query, limit: int, offset: int) -> Tuple[list, int]:
    """Return one page of the query and the unpaginated total."""
    total = query.order_by(None).count()
    items = query.limit(limit).offset(offset).all()
    return items, total


class ItemService:

    @staticmethod
    def _base_query(db: Session, household_id: int) -> Query:
        return db.query(Item).filter(Item.household_id == household_id)

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidArgument("Item name cannot be empty")
        return cleaned

    @staticmethod
    def validate_placement(
        db: Session,
        household_id: int,
        location_id: Optional[int],
        container_id: Optional[int]
    ) -> None:
        """Referenced location and container must exist in the household."""
        if location_id is not None:
            LocationService.require_location(db, location_id, household_id)
        if container_id is not None:
            ContainerService.require_container(db, container_id, household_id)

    @staticmethod
    def get_item_by_id(db: Session, item_id: int, household_id: Optional[int]) -> Optional[Item]:
        if household_id is None:
            return None
        return db.query(Item).filter(
            and_(
                Item.id == item_id,
                Item.household_id == household_id
            )
        ).first()

    @staticmethod
    def require_item(db: Session, item_id: int, household_id: Optional[int]) -> Item:
        item = ItemService.get_item_by_id(db, item_id, household_id)
        if not item:
            raise NotFound("Item not found")
        return item

    @staticmethod
    def create_item(db: Session, household_id: int, user_id: str, data: ItemCreate) -> Item:
        name = ItemService._clean_name(data.name)
        ItemService.validate_placement(db, household_id, data.location_id, data.container_id)

        item = Item(
            household_id=household_id,
            user_id=user_id,
            location_id=data.location_id,
            container_id=data.container_id,
            name=name,
            description=data.description,
            photo_url=data.photo_url,
            thumbnail_url=data.thumbnail_url,
            brand=data.brand,
            color=data.color,
            size=data.size,
            quantity=data.quantity,
            min_quantity=data.min_quantity,
            expiration_date=data.expiration_date,
            category=data.category,
            notes=data.notes,
            tags=list(data.tags),
            is_favorite=data.is_favorite,
        )
        db.add(item)
        db.flush()
        return item

    @staticmethod
    def batch_create(db: Session, household_id: int, user_id: str, items: list[ItemCreate]) -> list[Item]:
        """
        Create several items at once (shelf photo results, quick entry).

        All or nothing: one invalid entry rejects the whole batch.
        """
        for data in items:
            ItemService._clean_name(data.name)
        return [ItemService.create_item(db, household_id, user_id, data) for data in items]

    @staticmethod
    def update_item(db: Session, item_id: int, household_id: Optional[int], data: ItemUpdate) -> Item:
        item = ItemService.require_item(db, item_id, household_id)

        update_data = data.model_dump(exclude_unset=True)

        if "name" in update_data:
            update_data["name"] = ItemService._clean_name(update_data["name"])

        # Required columns cannot be cleared with an explicit null
        for field in ("quantity", "is_favorite"):
            if field in update_data and update_data[field] is None:
                del update_data[field]
        if "tags" in update_data and update_data["tags"] is None:
            update_data["tags"] = []

        ItemService.validate_placement(
            db,
            item.household_id,
            update_data.get("location_id"),
            update_data.get("container_id")
        )

        for field, value in update_data.items():
            setattr(item, field, value)

        db.flush()
        return item

    @staticmethod
    def delete_item(db: Session, item_id: int, household_id: Optional[int]) -> None:
        item = ItemService.require_item(db, item_id, household_id)
        db.delete(item)
        db.flush()

    @staticmethod
    def toggle_favorite(db: Session, item_id: int, household_id: Optional[int]) -> Item:
        item = ItemService.require_item(db, item_id, household_id)
        item.is_favorite = not item.is_favorite
        db.flush()
        return item

    @staticmethod
    def confirm_location(db: Session, item_id: int, household_id: Optional[int]) -> Item:
        """Record that someone just saw the item where it is supposed to be."""
        item = ItemService.require_item(db, item_id, household_id)
        item.last_confirmed_at = datetime.now(timezone.utc)
        db.flush()
        return item

    # ------------------------------------------------------------------
    # Listings (empty without a household)
    # ------------------------------------------------------------------

    @staticmethod
    def search(db: Session, household_id: Optional[int], text: str, limit: int, offset: int) -> Tuple[list[Item], int]:
        """Case-insensitive match on name, description or any tag."""
        if household_id is None:
            return [], 0

        term = f"%{text.strip()}%"
        query = ItemService._base_query(db, household_id).filter(
            or_(
                Item.name.ilike(term),
                Item.description.ilike(term),
                cast(Item.tags, String).ilike(term)
            )
        ).order_by(Item.created_at.desc(), Item.id.desc())
        return paginate(query, limit, offset)

    @staticmethod
    def get_expiring(db: Session, household_id: Optional[int], limit: int, offset: int) -> Tuple[list[Item], int]:
        """Items expiring within the next week, already expired ones included."""
        if household_id is None:
            return [], 0

        cutoff = datetime.now(timezone.utc).date() + timedelta(days=EXPIRING_WINDOW_DAYS)
        query = ItemService._base_query(db, household_id).filter(
            Item.expiration_date.isnot(None),
            Item.expiration_date <= cutoff
        ).order_by(Item.expiration_date.asc(), Item.id.asc())
        return paginate(query, limit, offset)

    @staticmethod
    def get_favorites(db: Session, household_id: Optional[int], limit: int, offset: int) -> Tuple[list[Item], int]:
        if household_id is None:
            return [], 0

        query = ItemService._base_query(db, household_id).filter(
            Item.is_favorite == True
        ).order_by(Item.name.asc(), Item.id.asc())
        return paginate(query, limit, offset)

    @staticmethod
    def get_recent(db: Session, household_id: Optional[int], limit: int, offset: int) -> Tuple[list[Item], int]:
        if household_id is None:
            return [], 0

        query = ItemService._base_query(db, household_id).order_by(
            Item.created_at.desc(), Item.id.desc()
        )
        return paginate(query, limit, offset)

    @staticmethod
    def get_needs_confirmation(db: Session, household_id: Optional[int], limit: int, offset: int) -> Tuple[list[Item], int]:
        """Items never confirmed, or not confirmed for a week. Never-confirmed first."""
        if household_id is None:
            return [], 0

        stale_before = datetime.now(timezone.utc) - timedelta(days=CONFIRMATION_STALE_DAYS)
        query = ItemService._base_query(db, household_id).filter(
            or_(
                Item.last_confirmed_at.is_(None),
                Item.last_confirmed_at < stale_before
            )
        ).order_by(
            Item.last_confirmed_at.asc().nullsfirst(),
            Item.created_at.desc(),
            Item.id.desc()
        )
        return paginate(query, limit, offset)

    @staticmethod
    def list_by_location(db: Session, location_id: int, household_id: Optional[int]) -> list[Item]:
        if household_id is None:
            return []
        return ItemService._base_query(db, household_id).filter(
            Item.location_id == location_id
        ).order_by(Item.created_at.desc(), Item.id.desc()).all()

    @staticmethod
    def list_by_container(db: Session, container_id: int, household_id: Optional[int]) -> list[Item]:
        if household_id is None:
            return []
        return ItemService._base_query(db, household_id).filter(
            Item.container_id == container_id
        ).order_by(Item.created_at.desc(), Item.id.desc()).all()
