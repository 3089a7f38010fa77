"""
Mailer facade.

Wraps the Resend client with per-recipient rate limiting. Application code
depends on ``Mailer`` rather than on the HTTP client.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from leadsync.integrations.resend import EmailMessage, EmailResult, ResendClient

from .rate_limit import EmailRateLimiter

logger = logging.getLogger(__name__)


class Mailer:
    """Send email through Resend.

    Args:
        client: Resend API client
        rate_limiter: Limiter used by ``send_with_rate_limit``
        brand: Name shown in email layouts (defaults to the sender name)
        site_url: Public site linked from email footers
    """

    def __init__(
        self,
        client: ResendClient,
        rate_limiter: Optional[EmailRateLimiter] = None,
        *,
        brand: Optional[str] = None,
        site_url: str = "https://example.org",
    ) -> None:
        self.client = client
        self.rate_limiter = rate_limiter or EmailRateLimiter()
        self.brand = brand or client.from_name
        self.site_url = site_url

    async def send(self, message: EmailMessage) -> EmailResult:
        return await self.client.send(message)

    async def send_with_rate_limit(self, message: EmailMessage, action: str = "email") -> EmailResult:
        """Send unless the recipient exceeded the limit for ``action``.

        Returns:
            The send result, or ``rate_limited=True`` without contacting Resend
        """
        decision = self.rate_limiter.check(message.primary_recipient, action)
        if not decision.allowed:
            seconds = math.ceil(decision.reset_in)
            logger.warning("Rate limited %s email to %s for %ss", action, message.primary_recipient, seconds)
            return EmailResult(
                success=False,
                error=f"Too many emails sent. Please try again in {seconds} seconds.",
                rate_limited=True,
            )
        return await self.client.send(message)
