"""Library settings loaded from the environment"""

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Library settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # HTTP Transport Configuration
    http_timeout: float = 30.0  # seconds
    user_agent: str = "openapi-mcp/0.1.0"

    # Schema Synthesis
    schema_max_depth: int = 32

    # Authentication Configuration
    auth_type: Literal["none", "oauth2", "oauth1"] = "none"
    oauth_client_id: str = ""  # OAuth 1.0a consumer key
    oauth_client_secret: str = ""  # OAuth 1.0a consumer secret

    oauth2_token_url: str = ""
    oauth2_scope: str | None = None

    oauth1_request_token_url: str = ""
    oauth1_access_token_url: str = ""
    oauth1_signature_method: str = "HMAC-SHA1"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


def validate_environment() -> None:
    """
    Validate authentication settings on startup.

    Missing values are reported as warnings only. Handlers can still be
    created programmatically with explicit credentials.
    """
    # Skip validation in test mode
    if os.getenv("TESTING") == "true":
        logger.info("Skipping environment validation in test mode")
        return

    settings = get_settings()

    if settings.auth_type == "none":
        return

    missing: list[str] = []
    if not settings.oauth_client_id:
        missing.append("OAUTH_CLIENT_ID")
    if not settings.oauth_client_secret:
        missing.append("OAUTH_CLIENT_SECRET")

    if settings.auth_type == "oauth2" and not settings.oauth2_token_url:
        missing.append("OAUTH2_TOKEN_URL")

    if settings.auth_type == "oauth1":
        if not settings.oauth1_request_token_url:
            missing.append("OAUTH1_REQUEST_TOKEN_URL")
        if not settings.oauth1_access_token_url:
            missing.append("OAUTH1_ACCESS_TOKEN_URL")

    if missing:
        logger.warning(
            f"⚠️  AUTH_TYPE={settings.auth_type} but {', '.join(missing)} not set. "
            "Requests will be sent unsigned until a handler is configured."
        )
