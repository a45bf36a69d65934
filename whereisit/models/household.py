"""
Household Model
Represents a household, the unit of sharing and isolation.

Every location, container, item, invitation and shopping list entry belongs
to exactly one household. Members point at it through users.household_id.

Key features:
- Zero or one owner, many members
- Created explicitly by a user, or implicitly the first time a user without
  a household writes data
- Invitation system for adding members
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from whereisit.models.base import BaseModel


class Household(BaseModel):
    """
    Household model.

    Fields:
        id (int): Primary key, inherited from BaseModel
        name (str): Display name
        owner_id (str): User who created the household explicitly (nullable,
            auto-provisioned households have no owner)
        created_at (datetime): Creation timestamp
        updated_at (datetime): Last modification timestamp

    Relationships:
        members: Users whose household_id points here
        invitations: Invitations issued for this household

    Example usage:
        household = Household(name="Casa Rossi", owner_id=user.id)
        db.add(household)
        db.flush()
    """

    __tablename__ = "households"

    # Plain column rather than a foreign key: users.household_id already
    # references this table and the pair would form a cycle.
    owner_id = Column(
        String(255),
        nullable=True,
        index=True,
        comment="User who owns this household"
    )

    name = Column(
        String(255),
        nullable=False,
        comment="Display name for the household"
    )

    members = relationship("User", back_populates="household")
    invitations = relationship(
        "HouseholdInvitation",
        back_populates="household",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        """String representation for debugging."""
        return f"<Household(id={self.id}, name={self.name}, owner_id={self.owner_id})>"

    def is_owner(self, user_id: str) -> bool:
        """Check if the given user owns this household."""
        return self.owner_id is not None and self.owner_id == user_id
