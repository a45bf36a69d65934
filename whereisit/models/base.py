"""
Base Model Class
Provides common fields and functionality for all database models.

All household-owned models should inherit from BaseModel instead of Base
directly. This ensures consistent integer ids and automatic timestamp tracking.
"""

from sqlalchemy import Column, DateTime, Integer, func

from whereisit.db.base import Base


class BaseModel(Base):
    """
    Abstract base model with common fields for all tables.

    Provides:
    - Integer auto-increment primary key
    - created_at timestamp (automatically set on insert)
    - updated_at timestamp (automatically updated on modification)

    Example:
        class Location(BaseModel):
            __tablename__ = "locations"
            name = Column(String(255), nullable=False)
            # id, created_at, updated_at are inherited automatically
    """

    # Make this an abstract base class (no table created for BaseModel itself)
    __abstract__ = True

    # Primary Key
    # Ids are exposed to clients, so every lookup must also filter by
    # household_id: a guessed id from another household must behave as missing.
    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    # Timestamp: Record Creation
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    # Timestamp: Last Update
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self):
        """
        String representation of model instance.
        Useful for debugging and logging.
        """
        return f"<{self.__class__.__name__}(id={self.id})>"
