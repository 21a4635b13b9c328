"""
Player model: the character a person controls in game.

Character names share one global namespace; the unique constraint on the
name column is the final authority on name uniqueness.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .enums import PlayerPronoun, PlayerSex

if TYPE_CHECKING:
    from .account import Account


class Player(Base):
    """A character owned by an account."""

    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(length=255), unique=True, nullable=False)

    sex: Mapped[int] = mapped_column(Integer, default=int(PlayerSex.FEMALE), nullable=False)
    pronoun: Mapped[int] = mapped_column(Integer, default=int(PlayerPronoun.THEY), nullable=False)
    is_main: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    level: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    vocation: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    health: Mapped[int] = mapped_column(Integer, default=150, nullable=False)
    health_max: Mapped[int] = mapped_column(Integer, default=150, nullable=False)
    mana: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    mana_max: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, default=400, nullable=False)
    soul: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    town_id: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    look_type: Mapped[int] = mapped_column(Integer, default=136, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(), default=lambda: datetime.now(UTC).replace(tzinfo=None), nullable=False
    )

    account: Mapped["Account"] = relationship("Account", back_populates="players")

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, name={self.name}, level={self.level}, is_main={self.is_main})>"
