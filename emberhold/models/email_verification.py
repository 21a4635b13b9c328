"""
Email verification token model.

A token is issued together with the account at signup and is consumed once
by the confirmation flow. Tokens for an email change carry the new address.
"""

import secrets
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .account import Account


class EmailVerification(Base):
    """Single-use, time-limited proof of control of an email address."""

    __tablename__ = "email_verifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    token: Mapped[str] = mapped_column(
        String(length=128), unique=True, nullable=False, default=lambda: EmailVerification._generate_token()
    )
    new_email: Mapped[str | None] = mapped_column(String(length=255), nullable=True)
    # Store datetimes as naive UTC
    expires_at: Mapped[datetime] = mapped_column(DateTime(), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(), default=lambda: datetime.now(UTC).replace(tzinfo=None), nullable=False
    )

    account: Mapped["Account"] = relationship("Account", back_populates="email_verifications")

    def __repr__(self) -> str:
        return f"<EmailVerification(id={self.id}, account_id={self.account_id}, expires_at={self.expires_at})>"

    def is_expired(self) -> bool:
        """Check if the token has expired. Handles naive timestamps as UTC."""
        expires_at_utc = (
            self.expires_at if self.expires_at.tzinfo is not None else self.expires_at.replace(tzinfo=UTC)
        )
        return datetime.now(UTC) > expires_at_utc

    @classmethod
    def issue(cls, expires_in_days: int = 30, new_email: str | None = None) -> "EmailVerification":
        """Create an unsaved token that expires expires_in_days from now."""
        return cls(
            token=cls._generate_token(),
            new_email=new_email,
            expires_at=(datetime.now(UTC) + timedelta(days=expires_in_days)).replace(tzinfo=None),
        )

    @staticmethod
    def _generate_token() -> str:
        return secrets.token_urlsafe(32)
