"""
Item Model
Physical possessions tracked by a household.

Features:
- Placement: optional location and optional container (location is kept even
  when a container is set, for display)
- Quantity with optional minimum threshold for shopping suggestions
- Expiration date, category, free-form notes and tags
- Favorite flag and "last confirmed" timestamp for placement checks
- Consumption history (see ConsumptionEntry)
"""

from sqlalchemy import Column, String, Integer, ForeignKey, Boolean, Date, DateTime, Text, JSON
from sqlalchemy.orm import relationship

from whereisit.models.base import BaseModel


class Item(BaseModel):
    """
    Item Model

    Created one by one or in batches (for instance from a shelf photo
    analysis), changed by edits, bulk operations and consumption.
    """
    __tablename__ = "items"

    # Household ownership
    household_id = Column(
        Integer,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Creator
    user_id = Column(
        String(255),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True
    )

    # Placement
    location_id = Column(
        Integer,
        ForeignKey("locations.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    container_id = Column(
        Integer,
        ForeignKey("containers.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Product info
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    photo_url = Column(String(1000), nullable=True)
    thumbnail_url = Column(String(1000), nullable=True)
    brand = Column(String(255), nullable=True)
    color = Column(String(100), nullable=True)
    size = Column(String(100), nullable=True)
    category = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    # Stock
    quantity = Column(Integer, default=1, nullable=False)
    min_quantity = Column(Integer, nullable=True)

    # Expiry tracking
    expiration_date = Column(Date, nullable=True, index=True)

    # Ordered list of strings, duplicates allowed until merged
    tags = Column(JSON, default=list, nullable=False)

    is_favorite = Column(Boolean, default=False, nullable=False)
    last_confirmed_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    household = relationship("Household")
    location = relationship("Location")
    container = relationship("Container")
    consumption_history = relationship(
        "ConsumptionEntry",
        back_populates="item",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ConsumptionEntry.recorded_at"
    )

    def __repr__(self):
        return f"<Item(id={self.id}, name='{self.name}', qty={self.quantity})>"

    @property
    def is_low_stock(self) -> bool:
        """Quantity at or under the minimum threshold, when one is set."""
        return self.min_quantity is not None and self.quantity <= self.min_quantity
