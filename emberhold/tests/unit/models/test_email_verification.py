"""Tests for the email verification token model."""

from datetime import UTC, datetime, timedelta

from emberhold.models.email_verification import EmailVerification


class TestEmailVerification:
    """Test token issue and expiry."""

    def test_issue_expires_in_thirty_days(self) -> None:
        verification = EmailVerification.issue()
        expected = datetime.now(UTC).replace(tzinfo=None) + timedelta(days=30)
        assert abs(verification.expires_at - expected) < timedelta(minutes=1)
        assert verification.expires_at.tzinfo is None

    def test_issue_generates_unique_tokens(self) -> None:
        first = EmailVerification.issue()
        second = EmailVerification.issue()
        assert first.token != second.token
        assert len(first.token) >= 40

    def test_issue_for_email_change(self) -> None:
        assert EmailVerification.issue(new_email="new@example.com").new_email == "new@example.com"

    def test_is_expired(self) -> None:
        assert not EmailVerification.issue().is_expired()
        stale = EmailVerification(token="t", expires_at=datetime.now(UTC).replace(tzinfo=None) - timedelta(seconds=1))
        assert stale.is_expired()
