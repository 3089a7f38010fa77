"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds the variables documented in
.env.example and that the grouped configuration models are derived from it.
"""

from pathlib import Path

import pytest

from leadsync.server.core.config import (
    GooglePlacesConfig,
    ResendConfig,
    ScoringConfig,
    Settings,
    SquareConfig,
    StripeConfig,
)


@pytest.fixture
def env_example_path() -> Path:
    """Get path to .env.example file."""
    return Path(__file__).resolve().parents[4] / ".env.example"


@pytest.fixture
def env_example_vars(env_example_path: Path) -> dict[str, str]:
    """Parse .env.example file and return environment variables."""
    env_vars = {}
    with open(env_example_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, value = line.split("=", 1)
                env_vars[key.strip()] = value.strip()
    return env_vars


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_example_documents_every_setting(self, env_example_vars: dict[str, str]):
        """Every aliased setting appears in .env.example."""
        aliases = {field.alias for field in Settings.model_fields.values() if field.alias}
        missing = aliases - set(env_example_vars) - {"CORS_ORIGINS"}
        assert missing == set()

    def test_server_binding(self, env_example_vars: dict[str, str], monkeypatch):
        monkeypatch.setenv("LEADSYNC_SERVER_HOST", env_example_vars["LEADSYNC_SERVER_HOST"])
        monkeypatch.setenv("LEADSYNC_SERVER_PORT", "9001")
        monkeypatch.setenv("LEADSYNC_LOG_LEVEL", "DEBUG")

        settings = Settings()
        assert settings.server_host == "0.0.0.0"
        assert settings.server_port == 9001
        assert settings.log_level == "DEBUG"

    def test_database_url_binding(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/leadsync")
        assert Settings().database_url == "postgresql://u:p@db:5432/leadsync"

    def test_secrets_default_to_none(self):
        settings = Settings()
        assert settings.google_maps_api_key is None
        assert settings.stripe_secret_key is None
        assert settings.stripe_webhook_secret is None
        assert settings.square_webhook_signature_key is None
        assert settings.resend_api_key is None


class TestGroupedConfigs:
    """Test the grouped configuration properties."""

    def test_google_places(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "g-key")
        cfg = Settings().google_places
        assert isinstance(cfg, GooglePlacesConfig)
        assert cfg.api_key == "g-key"
        assert cfg.places_base_url == "https://places.googleapis.com"

    def test_stripe(self, monkeypatch):
        monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test")
        monkeypatch.setenv("STRIPE_WEBHOOK_SECRET", "whsec_test")
        monkeypatch.setenv("STRIPE_WEBHOOK_TOLERANCE_SECONDS", "60")
        cfg = Settings().stripe
        assert isinstance(cfg, StripeConfig)
        assert (cfg.secret_key, cfg.webhook_secret, cfg.webhook_tolerance_seconds) == ("sk_test", "whsec_test", 60)

    def test_square(self, monkeypatch):
        monkeypatch.setenv("SQUARE_WEBHOOK_SIGNATURE_KEY", "sq-key")
        monkeypatch.setenv("SQUARE_WEBHOOK_NOTIFICATION_URL", "https://crm.example.org/api/v1/webhooks/square")
        cfg = Settings().square
        assert isinstance(cfg, SquareConfig)
        assert cfg.signature_key == "sq-key"
        assert cfg.notification_url.endswith("/webhooks/square")

    def test_resend(self, monkeypatch):
        monkeypatch.setenv("RESEND_FROM_EMAIL", "hi@agency.test")
        monkeypatch.setenv("PUBLIC_SITE_URL", "https://agency.test")
        cfg = Settings().resend
        assert isinstance(cfg, ResendConfig)
        assert cfg.from_email == "hi@agency.test"
        assert cfg.site_url == "https://agency.test"

    def test_scoring_target_states(self, monkeypatch):
        monkeypatch.setenv("SCORING_TARGET_STATES", " ky, in ,,oh")
        cfg = Settings().scoring
        assert isinstance(cfg, ScoringConfig)
        assert cfg.target_state_list == ["KY", "IN", "OH"]

    def test_cors_defaults(self):
        cors = Settings().cors
        assert cors.origins == ["*"]
        assert cors.allow_credentials is True
