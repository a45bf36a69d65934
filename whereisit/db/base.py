"""
SQLAlchemy Declarative Base

Constraint names follow a fixed convention so that indexes and foreign keys
get the same names on PostgreSQL and SQLite, and migrations can refer to them.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Shared by users, households, inventory, shopping and error log tables
Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))
