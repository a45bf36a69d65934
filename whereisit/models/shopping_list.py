"""
Shopping List Model
Shared household shopping list.

Entries are free text: they are not linked to inventory items, so anyone in
the household can add "batteries" without an item existing first.
"""

from sqlalchemy import Column, String, Integer, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from whereisit.models.base import BaseModel


class ShoppingListItem(BaseModel):
    """
    Shopping List Item Model

    Fields:
        household_id: Owning household
        item_name: Free text
        quantity: How many to buy (default 1)
        is_purchased: Checked off
        added_by_user_id: Who added it
        created_at: When it was added (exposed as added_at)
    """

    __tablename__ = "shopping_list_items"

    household_id = Column(
        Integer,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    item_name = Column(String(255), nullable=False)
    quantity = Column(Integer, default=1, nullable=False)
    is_purchased = Column(Boolean, default=False, nullable=False)

    added_by_user_id = Column(
        String(255),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True
    )

    # Relationships
    household = relationship("Household")
    added_by = relationship("User")

    def __repr__(self):
        return f"<ShoppingListItem(id={self.id}, name='{self.item_name}', qty={self.quantity})>"
