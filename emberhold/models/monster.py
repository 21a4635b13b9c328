"""
Monster and town reference data.

Monster names share the character namespace: a character may not take the
name of a creature that exists in the game world.
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Monster(Base):
    """A non-player creature type."""

    __tablename__ = "monsters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(length=255), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Monster(id={self.id}, name={self.name})>"


class Town(Base):
    """A town characters can live in; starter towns are offered to new characters."""

    __tablename__ = "towns"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(length=255), nullable=False)
    is_starter: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<Town(id={self.id}, name={self.name}, is_starter={self.is_starter})>"
