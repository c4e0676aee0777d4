"""OAuth 2.0 client credentials authentication"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from openapi_mcp.core.exceptions import AuthenticationError
from openapi_mcp.services.http_client import HTTPClient

from .base import OAuthCredentials, TokenAuthenticationHandler

logger = logging.getLogger(__name__)


class OAuth2ClientCredentialsHandler(TokenAuthenticationHandler):
    """
    Bearer token authentication using the client credentials grant.

    The token is never refreshed automatically; call ``authenticate`` again
    when it expires.
    """

    def __init__(
        self,
        http_client: HTTPClient,
        token_url: str,
        client_id: str,
        client_secret: str,
        scope: str | None = None,
    ) -> None:
        """
        Initialize the handler.

        Args:
            http_client: Transport used for the token request
            token_url: OAuth 2.0 token endpoint
            client_id: Client ID, sent as the HTTP Basic user name
            client_secret: Client secret, sent as the HTTP Basic password
            scope: Optional scope for the access token request
        """
        super().__init__()
        self.http_client = http_client
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.scope = scope

    async def _fetch_credentials(self) -> OAuthCredentials:
        data = {"grant_type": "client_credentials"}
        if self.scope:
            data["scope"] = self.scope

        logger.debug(f"Requesting OAuth 2.0 access token from {self.token_url}")
        response = await self.http_client.post_form(
            self.token_url,
            data=data,
            auth=(self.client_id, self.client_secret),
        )

        if not response.is_success:
            raise AuthenticationError(
                f"Failed to obtain OAuth 2.0 access token. "
                f"Status: {response.status_code}, Response: {response.text}",
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            payload = response.json()
        except ValueError:
            raise AuthenticationError(
                f"OAuth 2.0 token response is not valid JSON. Response: {response.text}",
                status_code=response.status_code,
                response_body=response.text,
            ) from None

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(access_token, str) or not access_token:
            raise AuthenticationError(
                f"OAuth 2.0 token response does not contain 'access_token'. Response: {response.text}",
                status_code=response.status_code,
                response_body=response.text,
            )

        return OAuthCredentials(token=access_token)

    def sign(
        self,
        request: httpx.Request,
        query_params: Sequence[tuple[str, str]],
        body_params: Mapping[str, Any],
    ) -> None:
        credentials = self._credentials
        if credentials is None:
            return

        request.headers["Authorization"] = f"Bearer {credentials.token}"
