"""Outbound notifications."""

from .mailer import VerificationMailer

__all__ = ["VerificationMailer"]
