from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..errors import IntegrationNotConfiguredError, StripeApiError


class StripeClient:
    """
    Thin HTTP client for the Stripe REST API.

    Only the read used by payment reconciliation is implemented. Requests are
    authenticated with the secret key as a Bearer token.
    """

    def __init__(
        self,
        secret_key: Optional[str],
        *,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = "https://api.stripe.com",
        timeout: float = 20.0,
    ) -> None:
        self.secret_key = secret_key
        self.base_url = base_url.rstrip("/")
        self._http = client or httpx.AsyncClient(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self) -> Dict[str, str]:
        if not self.secret_key:
            raise IntegrationNotConfiguredError("STRIPE_SECRET_KEY")
        return {"Authorization": f"Bearer {self.secret_key}"}

    async def list_charges(self, limit: int = 100, customer: Optional[str] = None) -> List[Dict[str, Any]]:
        """List recent charges, newest first.

        Args:
            limit: Maximum number of charges (Stripe caps this at 100)
            customer: Optional Stripe customer id to restrict the listing

        Returns:
            Raw charge objects as returned by Stripe
        """
        headers = self._headers()
        params: Dict[str, Any] = {"limit": max(1, min(limit, 100))}
        if customer:
            params["customer"] = customer

        self._logger.debug("StripeClient.list_charges: GET %s/v1/charges params=%s", self.base_url, params)
        try:
            r = await self._http.get(f"{self.base_url}/v1/charges", headers=headers, params=params)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StripeApiError(
                f"Stripe list_charges failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise StripeApiError(f"Stripe list_charges request failed: {e}") from e

        data = r.json()
        charges = data.get("data") if isinstance(data, dict) else None
        if not isinstance(charges, list):
            raise StripeApiError("Unexpected response shape from list_charges", status_code=r.status_code, details=data)
        self._logger.debug("StripeClient.list_charges: got %d charges", len(charges))
        return charges
