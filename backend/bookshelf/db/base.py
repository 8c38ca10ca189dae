"""SQLAlchemy Declarative Base: shared base class for all ORM table classes.

Design Decisions:
    - Separate file for Base: avoids circular imports between models
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all Bookshelf ORM models."""
    pass
