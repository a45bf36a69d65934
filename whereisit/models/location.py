"""
Location Model
Top-level places within a household where things are kept.

Examples: Kitchen, Garage, Basement, Office.
"""

from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship

from whereisit.models.base import BaseModel


class Location(BaseModel):
    __tablename__ = "locations"

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

    # Not unique: two "Shelf" locations are allowed
    name = Column(String(255), nullable=False)

    # Relationships
    household = relationship("Household")
    containers = relationship("Container", back_populates="location")

    def __repr__(self):
        return f"<Location(id={self.id}, name='{self.name}', household_id={self.household_id})>"
