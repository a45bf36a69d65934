"""
Database Models Module
Contains SQLAlchemy ORM models for all database tables.

This module serves as the central import point for all models.
All models must be imported here to be registered with SQLAlchemy
and created during Base.metadata.create_all().
"""

from whereisit.db.base import Base
from whereisit.models.base import BaseModel
from whereisit.models.user import User
from whereisit.models.household import Household
from whereisit.models.household_invitation import HouseholdInvitation
from whereisit.models.location import Location
from whereisit.models.container import Container
from whereisit.models.item import Item
from whereisit.models.consumption import ConsumptionEntry
from whereisit.models.shopping_list import ShoppingListItem
from whereisit.models.error_log import ErrorLog

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "Household",
    "HouseholdInvitation",
    "Location",
    "Container",
    "Item",
    "ConsumptionEntry",
    "ShoppingListItem",
    "ErrorLog",
]
