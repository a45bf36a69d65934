"""
User Model
Represents an authenticated person using the inventory.

Identity lives in an external provider; this table only mirrors the opaque
user id (the token subject) and binds it to a household:
- Created implicitly on first authenticated access
- household_id is set by automatic provisioning, accepting an invitation,
  and cleared by leaving or being removed
- A user belongs to at most one household at a time
"""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from whereisit.db.base import Base


class User(Base):
    """
    User model mirroring the external identity.

    Fields:
        id (str): Opaque identity from the token subject (primary key)
        email (str): Email reported by the identity provider, if any
        image_url (str): Avatar URL reported by the identity provider
        household_id (int): Household the user belongs to (nullable)
        created_at (datetime): First time the user was seen
        updated_at (datetime): Last modification timestamp

    Example usage:
        user = User(id="user_2abc", email="anna@example.com")
        db.add(user)
        db.flush()
    """

    __tablename__ = "users"

    id = Column(
        String(255),
        primary_key=True,
        comment="External identity (token subject)"
    )

    email = Column(
        String(255),
        nullable=True,
        index=True,
        comment="User's email address, used to match invitations"
    )

    image_url = Column(
        String(500),
        nullable=True,
        comment="URL to user's profile picture"
    )

    household_id = Column(
        Integer,
        ForeignKey("households.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Household the user currently belongs to"
    )

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    household = relationship("Household", back_populates="members")

    def __repr__(self):
        """String representation for debugging."""
        return f"<User(id={self.id}, email={self.email}, household_id={self.household_id})>"

    @property
    def has_household(self) -> bool:
        """Check if the user is bound to a household."""
        return self.household_id is not None
