"""
Shared SQLAlchemy DeclarativeBase for all models.

All models must inherit from this Base so SQLAlchemy can resolve
string references in relationships across modules.
"""

from sqlalchemy.orm import DeclarativeBase

from ..metadata import metadata


class Base(DeclarativeBase):
    """Shared declarative base for all Emberhold models."""

    metadata = metadata
