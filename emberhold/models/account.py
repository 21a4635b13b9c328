"""
Account model.

An account owns one or more characters and the email verification tokens
issued for it. The email column holds the lower-cased credential identifier
and carries the storage-level unique constraint that is the final authority
on email uniqueness.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .email_verification import EmailVerification
    from .player import Player


class Account(Base):
    """Login account for the game."""

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(length=255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(length=255), nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    premium_days: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    coins: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Timestamps (persist naive UTC)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(), default=lambda: datetime.now(UTC).replace(tzinfo=None), nullable=False
    )

    players: Mapped[list["Player"]] = relationship("Player", back_populates="account", uselist=True)
    email_verifications: Mapped[list["EmailVerification"]] = relationship(
        "EmailVerification", back_populates="account", uselist=True, cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, email={self.email}, is_verified={self.is_verified})>"
