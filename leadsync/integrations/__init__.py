"""Clients for the third-party APIs Leadsync talks to."""

from .errors import (
    EmailDeliveryError,
    GeocodingError,
    IntegrationError,
    IntegrationNotConfiguredError,
    PlacesApiError,
    StripeApiError,
)

__all__ = [
    "EmailDeliveryError",
    "GeocodingError",
    "IntegrationError",
    "IntegrationNotConfiguredError",
    "PlacesApiError",
    "StripeApiError",
]
