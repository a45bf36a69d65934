"""
Container Model
Sub-units inside a location (Pantry Shelf A, Toolbox, Blue Bin...).

A container may be left without a location. When set, the location must
belong to the same household as the container.
"""

from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship

from whereisit.models.base import BaseModel


class Container(BaseModel):
    __tablename__ = "containers"

    household_id = Column(
        Integer,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    user_id = Column(
        String(255),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True
    )

    location_id = Column(
        Integer,
        ForeignKey("locations.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    name = Column(String(255), nullable=False)
    photo_url = Column(String(1000), nullable=True)

    # Relationships
    household = relationship("Household")
    location = relationship("Location", back_populates="containers")

    def __repr__(self):
        return f"<Container(id={self.id}, name='{self.name}', location_id={self.location_id})>"
