"""Shared HTTP transport for API calls and token requests"""

from http.cookiejar import DefaultCookiePolicy
from typing import Any

import httpx

from openapi_mcp.config import get_settings
from openapi_mcp.models import BuiltRequest


class HTTPClient:
    """
    HTTP client shared by every tool and authentication handler.

    Features:
    - Async support
    - One pooled connection set, safe for concurrent invocations
    - Timeout handling
    - Custom headers support

    No retries: a failed call surfaces immediately to its caller.
    """

    def __init__(
        self,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds (default from settings)
            headers: Default headers to include in all requests
            transport: Custom httpx transport (e.g. ``httpx.MockTransport`` in tests)
            client: Existing client to reuse; the caller keeps ownership of it
        """
        self.settings = get_settings()
        self.timeout = timeout or self.settings.http_timeout
        self.default_headers = headers or {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
        }
        self._transport = transport
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Underlying httpx client, created on first use"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self.default_headers,
                follow_redirects=True,
                transport=self._transport,
            )
            # Never store response cookies; every request carries only its own
            self._client.cookies.jar.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        return self._client

    def build_request(self, built: BuiltRequest) -> httpx.Request:
        """
        Convert a built request into an httpx request ready for signing.

        Header values are sent as UTF-8 bytes, so non-ASCII values pass
        through unvalidated.

        Args:
            built: Request produced by the request builder

        Returns:
            httpx.Request with headers and the UTF-8 encoded body
        """
        headers = {name: value.encode("utf-8") for name, value in built.headers.items()}
        content: bytes | None = None

        if built.body is not None:
            content = built.body.encode("utf-8")
            if built.content_type:
                headers["Content-Type"] = built.content_type.encode("utf-8")

        return self.client.build_request(
            built.method.value,
            built.url,
            headers=headers,
            content=content,
        )

    async def send(self, request: httpx.Request) -> httpx.Response:
        """
        Send a prepared request.

        Raises:
            httpx.HTTPError: On network failure or timeout
        """
        return await self.client.send(request)

    async def post_form(
        self,
        url: str,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        auth: tuple[str, str] | None = None,
    ) -> httpx.Response:
        """
        Make a form-encoded POST request.

        The response is returned whatever its status; callers decide how to
        treat failures.

        Args:
            url: URL to request
            data: Form fields to send
            headers: Additional headers
            auth: HTTP Basic credentials

        Returns:
            httpx.Response object

        Raises:
            httpx.HTTPError: On network failure or timeout
        """
        return await self.client.post(url, data=data, headers=headers, auth=auth)

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HTTPClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
