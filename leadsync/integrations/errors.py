"""Error types for outbound integrations.

Purpose:
- Provide typed exceptions thrown by the Google Places, Stripe and Resend
  clients.
- Expose HTTP-oriented context (e.g., status code, error body) for diagnosis.

Usage:
- Catch `IntegrationError` for general failures and inspect `status_code` or
  `details`.
- Catch `IntegrationNotConfiguredError` when a credential is missing.
"""

from __future__ import annotations

from typing import Any, Optional


class IntegrationError(Exception):
    """Base error for outbound API failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional structured payload from the upstream (e.g., JSON body).
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class IntegrationNotConfiguredError(IntegrationError):
    """Raised when a required credential is not configured.

    Args:
        setting: Name of the missing environment variable.
    """

    def __init__(self, setting: str) -> None:
        super().__init__(f"{setting} environment variable is not set")
        self.setting = setting


class PlacesApiError(IntegrationError):
    """Raised when the Google Places API rejects a request."""


class GeocodingError(IntegrationError):
    """Raised when a location cannot be geocoded."""


class StripeApiError(IntegrationError):
    """Raised when the Stripe REST API rejects a request."""


class EmailDeliveryError(IntegrationError):
    """Raised when an email cannot be delivered."""
