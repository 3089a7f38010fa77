"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Integration Configuration Models
# =====================================================================


class GooglePlacesConfig(BaseModel):
    """Google Places / Geocoding API configuration."""

    api_key: Optional[str] = Field(
        default=None, alias="GOOGLE_MAPS_API_KEY", description="Google Maps platform API key"
    )
    places_base_url: str = Field(
        default="https://places.googleapis.com",
        alias="GOOGLE_PLACES_BASE_URL",
        description="Base URL of the Places (New) API",
    )
    geocode_base_url: str = Field(
        default="https://maps.googleapis.com",
        alias="GOOGLE_GEOCODE_BASE_URL",
        description="Base URL of the Geocoding API",
    )

    model_config = {"populate_by_name": True}


class StripeConfig(BaseModel):
    """Stripe REST API and webhook configuration."""

    secret_key: Optional[str] = Field(
        default=None, alias="STRIPE_SECRET_KEY", description="Stripe secret API key"
    )
    webhook_secret: Optional[str] = Field(
        default=None, alias="STRIPE_WEBHOOK_SECRET", description="Signing secret of the Stripe webhook endpoint"
    )
    api_base_url: str = Field(
        default="https://api.stripe.com", alias="STRIPE_API_BASE_URL", description="Stripe REST API base URL"
    )
    webhook_tolerance_seconds: int = Field(
        default=300,
        alias="STRIPE_WEBHOOK_TOLERANCE_SECONDS",
        description="Maximum age of a signed webhook timestamp",
    )

    model_config = {"populate_by_name": True}


class SquareConfig(BaseModel):
    """Square webhook configuration."""

    signature_key: Optional[str] = Field(
        default=None, alias="SQUARE_WEBHOOK_SIGNATURE_KEY", description="Square webhook signature key"
    )
    notification_url: Optional[str] = Field(
        default=None,
        alias="SQUARE_WEBHOOK_NOTIFICATION_URL",
        description="Notification URL registered with Square (prefixed to the signed body)",
    )

    model_config = {"populate_by_name": True}


class ResendConfig(BaseModel):
    """Resend email API configuration."""

    api_key: Optional[str] = Field(default=None, alias="RESEND_API_KEY", description="Resend API key")
    from_email: str = Field(
        default="noreply@example.org", alias="RESEND_FROM_EMAIL", description="Default sender address"
    )
    from_name: str = Field(default="Leadsync", alias="RESEND_FROM_NAME", description="Default sender display name")
    api_base_url: str = Field(
        default="https://api.resend.com", alias="RESEND_API_BASE_URL", description="Resend API base URL"
    )
    site_url: str = Field(
        default="https://example.org", alias="PUBLIC_SITE_URL", description="Public site URL used in email footers"
    )

    model_config = {"populate_by_name": True}


class ScoringConfig(BaseModel):
    """Lead scoring location preferences."""

    home_city: str = Field(default="Louisville", alias="SCORING_HOME_CITY", description="City scored as local")
    home_state: str = Field(default="KY", alias="SCORING_HOME_STATE", description="State scored as home state")
    target_states: str = Field(
        default="KY,IN,OH,TN,WV",
        alias="SCORING_TARGET_STATES",
        description="Comma separated list of regional states",
    )

    model_config = {"populate_by_name": True}

    @property
    def target_state_list(self) -> List[str]:
        return [s.strip().upper() for s in self.target_states.split(",") if s.strip()]


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Leadsync Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Leadsync server host address to bind to",
        alias="LEADSYNC_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="Leadsync server port number",
        alias="LEADSYNC_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Leadsync server logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="LEADSYNC_LOG_LEVEL",
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./leadsync.db",
        description="Async connection URL for the application database",
        alias="DATABASE_URL",
    )

    # =====================================================================
    # Google Places
    # =====================================================================
    google_maps_api_key: Optional[str] = Field(default=None, alias="GOOGLE_MAPS_API_KEY")
    google_places_base_url: str = Field(default="https://places.googleapis.com", alias="GOOGLE_PLACES_BASE_URL")
    google_geocode_base_url: str = Field(default="https://maps.googleapis.com", alias="GOOGLE_GEOCODE_BASE_URL")

    # =====================================================================
    # Stripe
    # =====================================================================
    stripe_secret_key: Optional[str] = Field(default=None, alias="STRIPE_SECRET_KEY")
    stripe_webhook_secret: Optional[str] = Field(default=None, alias="STRIPE_WEBHOOK_SECRET")
    stripe_api_base_url: str = Field(default="https://api.stripe.com", alias="STRIPE_API_BASE_URL")
    stripe_webhook_tolerance_seconds: int = Field(default=300, alias="STRIPE_WEBHOOK_TOLERANCE_SECONDS")

    # =====================================================================
    # Square
    # =====================================================================
    square_webhook_signature_key: Optional[str] = Field(default=None, alias="SQUARE_WEBHOOK_SIGNATURE_KEY")
    square_webhook_notification_url: Optional[str] = Field(default=None, alias="SQUARE_WEBHOOK_NOTIFICATION_URL")

    # =====================================================================
    # Resend
    # =====================================================================
    resend_api_key: Optional[str] = Field(default=None, alias="RESEND_API_KEY")
    resend_from_email: str = Field(default="noreply@example.org", alias="RESEND_FROM_EMAIL")
    resend_from_name: str = Field(default="Leadsync", alias="RESEND_FROM_NAME")
    resend_api_base_url: str = Field(default="https://api.resend.com", alias="RESEND_API_BASE_URL")
    public_site_url: str = Field(default="https://example.org", alias="PUBLIC_SITE_URL")

    # =====================================================================
    # Lead Scoring
    # =====================================================================
    scoring_home_city: str = Field(default="Louisville", alias="SCORING_HOME_CITY")
    scoring_home_state: str = Field(default="KY", alias="SCORING_HOME_STATE")
    scoring_target_states: str = Field(default="KY,IN,OH,TN,WV", alias="SCORING_TARGET_STATES")

    # =====================================================================
    # CORS
    # =====================================================================
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def google_places(self) -> GooglePlacesConfig:
        """Get Google Places configuration from environment variables."""
        return GooglePlacesConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def stripe(self) -> StripeConfig:
        """Get Stripe configuration from environment variables."""
        return StripeConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def square(self) -> SquareConfig:
        """Get Square configuration from environment variables."""
        return SquareConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def resend(self) -> ResendConfig:
        """Get Resend configuration from environment variables."""
        return ResendConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def scoring(self) -> ScoringConfig:
        """Get lead scoring configuration from environment variables."""
        return ScoringConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
