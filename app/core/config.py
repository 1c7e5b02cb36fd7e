"""Application configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available for import throughout the app.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Supabase (checked per call, see app.db.supabase)
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""

    # Tables
    CANDIDATE_PROFILES_TABLE: str = "candidate_profiles"
    ORGANIZATIONS_TABLE: str = "organizations"
    PAYMENT_PLANS_TABLE: str = "payment_plans"

    # Event producers (empty URL disables the producer)
    AUDIT_LOG_PRODUCER_URL: str = ""
    GOOGLE_SHEET_PRODUCER_URL: str = ""
    ACTIVE_CAMPAIGN_PRODUCER_URL: str = ""
    HUBSPOT_PRODUCER_URL: str = ""
    PRODUCER_TIMEOUT_SECONDS: float = 10.0

    # Integrations
    GOOGLE_SHEET_NAME: str = "Contacts"
    AUDIT_LOG_MODULE: int = 2

    # Auth
    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()
