"""Dispatch of built, signed requests and classification of responses"""

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from openapi_mcp.auth.base import AuthenticationHandler
from openapi_mcp.auth.noop import NoOpAuthenticationHandler
from openapi_mcp.core.exceptions import TransportError
from openapi_mcp.core.request_builder import build_request
from openapi_mcp.models import EndpointTarget

from .http_client import HTTPClient

logger = logging.getLogger(__name__)


class WebApiCaller:
    """
    Calls API operations: build request, sign, send, decode.

    One caller is shared by every tool of an API. It holds no per-call
    state, so invocations may run concurrently.
    """

    def __init__(
        self,
        http_client: HTTPClient | None = None,
        auth_handler: AuthenticationHandler | None = None,
    ) -> None:
        """
        Initialize the caller.

        Args:
            http_client: Shared transport (default: a new HTTPClient)
            auth_handler: Request signer (default: no authentication)
        """
        self.http_client = http_client or HTTPClient()
        self.auth_handler = auth_handler or NoOpAuthenticationHandler()

    async def call_api(self, target: EndpointTarget, arguments: Mapping[str, Any]) -> Any:
        """
        Call one operation and return its decoded response.

        Args:
            target: Base URL and operation to call
            arguments: Argument values keyed by parameter or body field name

        Returns:
            Parsed JSON body; ``{"success": true, "statusCode": N}`` for an
            empty body; ``{"content": text, "statusCode": N}`` for a body that
            is not JSON

        Raises:
            TransportError: If the response status is not 2xx
            SpecConfigurationError: If the operation's method is not supported
            httpx.HTTPError: On network failure or timeout
        """
        built = build_request(target, arguments)
        request = self.http_client.build_request(built)

        # Signing context is passed to every handler, whatever its kind
        self.auth_handler.sign(request, built.query_params, built.body_params)

        logger.info(f"Sending {built.method.value} request to {built.url}")
        response = await self.http_client.send(request)

        if not response.is_success:
            logger.error(f"❌ API call to {built.url} failed with status code {response.status_code}")
            raise TransportError(response.status_code, response.reason_phrase)

        return decode_response(response)


def decode_response(response: httpx.Response) -> Any:
    """
    Decode a successful response body into JSON-compatible data.

    Bodies that are empty or not JSON are wrapped instead of failing, so
    the caller always receives structured data.
    """
    text = response.text

    if not text.strip():
        return {"success": True, "statusCode": response.status_code}

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.debug(f"Response with status {response.status_code} is not JSON, wrapping raw text")
        return {"content": text, "statusCode": response.status_code}
