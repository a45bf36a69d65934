"""
Shopping List Service - Business Logic Layer
Shared household shopping list and threshold-based restock suggestions.
"""

from sqlalchemy.orm import Session, joinedload
from sqlalchemy import and_, case

from whereisit.core.exceptions import InvalidArgument, NotFound
from whereisit.models.item import Item
from whereisit.models.location import Location
from whereisit.models.shopping_list import ShoppingListItem
from whereisit.schemas.shopping import ShoppingItemCreate, ShoppingItemUpdate, ShoppingLowStockItem


class ShoppingService:

    @staticmethod
    def get_list(db: Session, household_id: int) -> list[ShoppingListItem]:
        """Open entries first, newest first within each group."""
        return db.query(ShoppingListItem).options(
            joinedload(ShoppingListItem.added_by)
        ).filter(
            ShoppingListItem.household_id == household_id
        ).order_by(
            ShoppingListItem.is_purchased.asc(),
            ShoppingListItem.created_at.desc(),
            ShoppingListItem.id.desc()
        ).all()

    @staticmethod
    def add_item(db: Session, household_id: int, user_id: str, data: ShoppingItemCreate) -> ShoppingListItem:
        name = data.item_name.strip()
        if not name:
            raise InvalidArgument("Item name cannot be empty")

        entry = ShoppingListItem(
            household_id=household_id,
            item_name=name,
            quantity=data.quantity,
            is_purchased=False,
            added_by_user_id=user_id,
        )
        db.add(entry)
        db.flush()
        return entry

    @staticmethod
    def update_item(db: Session, entry_id: int, household_id: int, data: ShoppingItemUpdate) -> ShoppingListItem:
        update_data = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if not update_data:
            raise InvalidArgument("No fields to update")

        entry = db.query(ShoppingListItem).filter(
            and_(
                ShoppingListItem.id == entry_id,
                ShoppingListItem.household_id == household_id
            )
        ).first()
        if not entry:
            raise NotFound("Shopping list item not found")

        for field, value in update_data.items():
            setattr(entry, field, value)

        db.flush()
        return entry

    @staticmethod
    def delete_item(db: Session, entry_id: int, household_id: int) -> None:
        entry = db.query(ShoppingListItem).filter(
            and_(
                ShoppingListItem.id == entry_id,
                ShoppingListItem.household_id == household_id
            )
        ).first()
        if not entry:
            raise NotFound("Shopping list item not found")

        db.delete(entry)
        db.flush()

    @staticmethod
    def get_low_stock_items(db: Session, household_id: int) -> list[ShoppingLowStockItem]:
        """
        Items at or below their minimum quantity.

        stock_status is "out" at zero and "low" otherwise. Items without a
        minimum are never suggested.
        """
        stock_status = case((Item.quantity == 0, "out"), else_="low")

        rows = db.query(
            Item.id,
            Item.name,
            Item.quantity,
            Item.min_quantity,
            stock_status.label("stock_status"),
            Location.name.label("location_name")
        ).outerjoin(
            Location, Item.location_id == Location.id
        ).filter(
            Item.household_id == household_id,
            Item.min_quantity.isnot(None),
            Item.quantity <= Item.min_quantity
        ).order_by(Item.quantity.asc(), Item.name.asc()).all()

        return [
            ShoppingLowStockItem(
                id=row.id,
                name=row.name,
                quantity=row.quantity,
                min_quantity=row.min_quantity,
                stock_status=row.stock_status,
                location_name=row.location_name,
            )
            for row in rows
        ]
