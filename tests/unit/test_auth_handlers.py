"""Tests for the no-op and custom handlers and handler selection"""

import httpx
import pytest

from openapi_mcp.auth import (
    NoOpAuthenticationHandler,
    OAuth1Handler,
    OAuth2ClientCredentialsHandler,
    RequestAuthenticationHandler,
    create_authentication_handler,
)
from openapi_mcp.config import Settings
from openapi_mcp.core import SpecConfigurationError, UnsupportedSignatureMethodError
from openapi_mcp.services import HTTPClient


def _settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestNoOpAuthenticationHandler:
    """Tests for NoOpAuthenticationHandler class"""

    @pytest.mark.asyncio
    async def test_always_authenticated(self) -> None:
        """Test the handler is authenticated and leaves requests untouched"""
        handler = NoOpAuthenticationHandler()
        await handler.authenticate()
        request = httpx.Request("GET", "https://api.example.com/users")

        handler.sign(request, [("q", "x")], {"name": "Alice"})

        assert handler.is_authenticated
        assert "Authorization" not in request.headers


class TestRequestAuthenticationHandler:
    """Tests for RequestAuthenticationHandler class"""

    def test_signer_receives_context(self) -> None:
        """Test the wrapped function gets the request and signing context"""
        calls = []

        def add_api_key(request, query_params, body_params):
            calls.append((list(query_params), dict(body_params)))
            request.headers["X-API-Key"] = "secret"

        handler = RequestAuthenticationHandler(add_api_key)
        request = httpx.Request("POST", "https://api.example.com/users")

        handler.sign(request, [("q", "x")], {"name": "Alice"})

        assert request.headers["X-API-Key"] == "secret"
        assert calls == [([("q", "x")], {"name": "Alice"})]
        assert handler.is_authenticated


class TestCreateAuthenticationHandler:
    """Tests for create_authentication_handler function"""

    def test_none(self) -> None:
        """Test AUTH_TYPE=none gives the no-op handler"""
        handler = create_authentication_handler(HTTPClient(), _settings(auth_type="none"))
        assert isinstance(handler, NoOpAuthenticationHandler)

    def test_oauth2(self) -> None:
        """Test AUTH_TYPE=oauth2 gives a client credentials handler on the given transport"""
        http_client = HTTPClient()
        handler = create_authentication_handler(
            http_client,
            _settings(
                auth_type="oauth2",
                oauth_client_id="id",
                oauth_client_secret="secret",
                oauth2_token_url="https://auth.example.com/token",
                oauth2_scope="read",
            ),
        )

        assert isinstance(handler, OAuth2ClientCredentialsHandler)
        assert handler.token_url == "https://auth.example.com/token"
        assert handler.scope == "read"
        assert handler.http_client is http_client
        assert not handler.is_authenticated

    def test_oauth1(self) -> None:
        """Test AUTH_TYPE=oauth1 gives an OAuth 1.0a handler"""
        handler = create_authentication_handler(
            HTTPClient(),
            _settings(
                auth_type="oauth1",
                oauth_client_id="key",
                oauth_client_secret="secret",
                oauth1_request_token_url="https://auth.example.com/request_token",
                oauth1_access_token_url="https://auth.example.com/access_token",
                oauth1_signature_method="HMAC-SHA256",
            ),
        )

        assert isinstance(handler, OAuth1Handler)
        assert handler.signature_method.value == "HMAC-SHA256"

    def test_missing_credentials(self) -> None:
        """Test OAuth without client credentials is a configuration error"""
        with pytest.raises(SpecConfigurationError, match="OAUTH_CLIENT_ID"):
            create_authentication_handler(
                HTTPClient(),
                _settings(auth_type="oauth2", oauth2_token_url="https://auth.example.com/token")
            )

    def test_missing_token_url(self) -> None:
        """Test OAuth 2.0 without a token URL is a configuration error"""
        with pytest.raises(SpecConfigurationError, match="OAUTH2_TOKEN_URL"):
            create_authentication_handler(
                HTTPClient(),
                _settings(auth_type="oauth2", oauth_client_id="id", oauth_client_secret="secret"),
            )

    def test_missing_oauth1_urls(self) -> None:
        """Test OAuth 1.0a without token endpoints is a configuration error"""
        with pytest.raises(SpecConfigurationError, match="OAUTH1_REQUEST_TOKEN_URL"):
            create_authentication_handler(
                HTTPClient(),
                _settings(auth_type="oauth1", oauth_client_id="key", oauth_client_secret="secret"),
            )

    def test_unsupported_signature_method(self) -> None:
        """Test an unknown OAuth 1.0a signature method is rejected"""
        with pytest.raises(UnsupportedSignatureMethodError):
            create_authentication_handler(
                HTTPClient(),
                _settings(
                    auth_type="oauth1",
                    oauth_client_id="key",
                    oauth_client_secret="secret",
                    oauth1_request_token_url="https://auth.example.com/request_token",
                    oauth1_access_token_url="https://auth.example.com/access_token",
                    oauth1_signature_method="RSA-SHA1",
                ),
            )
