from __future__ import annotations

import logging
from typing import Optional

import httpx

from .models import EmailMessage, EmailResult

DOMAIN_ERROR_HINTS = ("domain", "verify", "unauthorized")


def explain_error(message: str) -> str:
    """Prefix domain verification failures with an actionable hint."""
    lowered = message.lower()
    if any(hint in lowered for hint in DOMAIN_ERROR_HINTS):
        return (
            "Email sending failed: Domain verification required. Please verify the domain in "
            f"Resend dashboard or use a verified email address. Original error: {message}"
        )
    return message


class ResendClient:
    """
    Thin HTTP client for the Resend email API.

    ``send`` never raises for delivery problems; it returns an ``EmailResult``
    with ``success=False`` and the error text instead.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        from_email: str,
        from_name: str,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = "https://api.resend.com",
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.base_url = base_url.rstrip("/")
        self._http = client or httpx.AsyncClient(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    @property
    def default_from(self) -> str:
        return f"{self.from_name} <{self.from_email}>"

    async def aclose(self) -> None:
        await self._http.aclose()

    async def send(self, message: EmailMessage) -> EmailResult:
        if not self.api_key:
            self._logger.error("RESEND_API_KEY environment variable is not set")
            return EmailResult(success=False, error="RESEND_API_KEY environment variable is not set")

        payload = message.to_payload(self.default_from)
        self._logger.debug("ResendClient.send: POST %s/emails to=%s", self.base_url, payload["to"])
        try:
            r = await self._http.post(
                f"{self.base_url}/emails",
                headers={"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"},
                json=payload,
            )
        except httpx.HTTPError as e:
            self._logger.error("Exception sending email to %s: %s", message.primary_recipient, e)
            return EmailResult(success=False, error=str(e) or type(e).__name__)

        try:
            body = r.json() if r.content else {}
        except ValueError:
            body = {}
        if r.status_code >= 400:
            error = (body.get("message") if isinstance(body, dict) else None) or f"HTTP {r.status_code}"
            self._logger.error(
                "Resend API error: status=%s message=%s to=%s subject=%s",
                r.status_code,
                error,
                message.primary_recipient,
                message.subject,
            )
            return EmailResult(success=False, error=explain_error(error))

        email_id = body.get("id") if isinstance(body, dict) else None
        self._logger.info("Email sent to %s (id=%s)", message.primary_recipient, email_id)
        return EmailResult(success=True, email_id=email_id)
