"""Authentication handler selection from settings"""

import logging

from openapi_mcp.config import Settings, get_settings
from openapi_mcp.core.exceptions import SpecConfigurationError
from openapi_mcp.services.http_client import HTTPClient

from .base import AuthenticationHandler
from .noop import NoOpAuthenticationHandler
from .oauth1 import OAuth1Handler
from .oauth2 import OAuth2ClientCredentialsHandler

logger = logging.getLogger(__name__)


def create_authentication_handler(
    http_client: HTTPClient,
    settings: Settings | None = None,
) -> AuthenticationHandler:
    """
    Create the authentication handler selected by ``AUTH_TYPE``.

    The handler is returned unauthenticated; call ``authenticate`` before
    the first signed request. Token requests go through ``http_client``,
    which stays owned by the caller.

    Args:
        http_client: Shared transport for token requests
        settings: Settings to read (default: cached environment settings)

    Returns:
        Configured authentication handler

    Raises:
        SpecConfigurationError: If required endpoints or credentials are missing
    """
    settings = settings or get_settings()

    if settings.auth_type == "none":
        return NoOpAuthenticationHandler()

    if not settings.oauth_client_id or not settings.oauth_client_secret:
        raise SpecConfigurationError(
            f"AUTH_TYPE={settings.auth_type} requires OAUTH_CLIENT_ID and OAUTH_CLIENT_SECRET"
        )

    if settings.auth_type == "oauth2":
        if not settings.oauth2_token_url:
            raise SpecConfigurationError("AUTH_TYPE=oauth2 requires OAUTH2_TOKEN_URL")
        logger.info(f"Using OAuth 2.0 client credentials against {settings.oauth2_token_url}")
        return OAuth2ClientCredentialsHandler(
            http_client,
            token_url=settings.oauth2_token_url,
            client_id=settings.oauth_client_id,
            client_secret=settings.oauth_client_secret,
            scope=settings.oauth2_scope,
        )

    if not settings.oauth1_request_token_url or not settings.oauth1_access_token_url:
        raise SpecConfigurationError(
            "AUTH_TYPE=oauth1 requires OAUTH1_REQUEST_TOKEN_URL and OAUTH1_ACCESS_TOKEN_URL"
        )
    logger.info(f"Using OAuth 1.0a ({settings.oauth1_signature_method}) against {settings.oauth1_access_token_url}")
    return OAuth1Handler(
        http_client,
        request_token_url=settings.oauth1_request_token_url,
        access_token_url=settings.oauth1_access_token_url,
        consumer_key=settings.oauth_client_id,
        consumer_secret=settings.oauth_client_secret,
        signature_method=settings.oauth1_signature_method,
    )
