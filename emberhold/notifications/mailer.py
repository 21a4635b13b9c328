"""
Verification email dispatch.

Mail goes through an HTTP mail API. Sending happens after the signup
transaction has committed and is best-effort: a failure is logged and the
account simply stays unverified until the player asks for a new link.
"""

from urllib.parse import urlencode

import httpx

from ..config.models import MailConfig
from ..exceptions import create_error_context
from ..structured_logging.enhanced_logging_config import get_logger
from ..utils.error_logging import log_error_with_context
from ..utils.retry import call_with_retry

logger = get_logger(__name__)

VERIFICATION_SUBJECT = "Confirm your email address"


class VerificationMailer:
    """Sends the email verification link for a new account."""

    def __init__(
        self,
        config: MailConfig | None = None,
        client: httpx.AsyncClient | None = None,
        log_links: bool = False,
    ):
        self.config = config or MailConfig()
        # Links carry the verification token; only local development may log them
        self.log_links = log_links
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this mailer created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def verification_link(self, token: str) -> str:
        return f"{self.config.verify_url_base}?{urlencode({'token': token})}"

    def build_message(self, email: str, token: str) -> dict[str, str]:
        link = self.verification_link(token)
        return {
            "from": self.config.sender,
            "to": email,
            "subject": VERIFICATION_SUBJECT,
            "text": (
                "Welcome! Confirm your email address by opening the link below.\n\n"
                f"{link}\n\n"
                "If you did not create an account you can ignore this message."
            ),
        }

    async def _post(self, message: dict[str, str]) -> None:
        headers = {"Authorization": f"Bearer {self.config.api_key}"} if self.config.api_key else {}
        response = await self.client.post(self.config.api_url or "", json=message, headers=headers)
        response.raise_for_status()

    async def send_verification_email(self, email: str, token: str) -> bool:
        """
        Send the verification link to email.

        Transport errors are retried with backoff. Never raises; returns
        whether the message was handed to the mail API.
        """
        if not self.config.api_url:
            if self.log_links:
                logger.info(
                    "Mail API not configured; verification link not sent",
                    recipient=email,
                    verification_url=self.verification_link(token),
                )
            else:
                logger.info("Mail API not configured; verification email not sent", recipient=email)
            return False

        try:
            await call_with_retry(
                self._post,
                self.build_message(email, token),
                max_attempts=self.config.retry_attempts,
                initial_delay=self.config.retry_initial_delay,
                retry_on=(httpx.TransportError,),
            )
        except httpx.HTTPError as e:
            context = create_error_context(metadata={"operation": "send_verification_email", "recipient": email})
            log_error_with_context(e, context=context, level="warning")
            return False

        logger.info("Verification email sent", recipient=email)
        return True
