"""Adapter turning a plain signing function into an authentication handler"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

import httpx

from .base import AuthenticationHandler

RequestSigner = Callable[[httpx.Request, Sequence[tuple[str, str]], Mapping[str, Any]], None]


class RequestAuthenticationHandler(AuthenticationHandler):
    """
    Handler for request-only authentication such as static API keys.

    The wrapped function receives the request and the signing context on
    every call. There is no handshake, so the handler is always
    authenticated.

    Example:
        >>> def add_api_key(request, query_params, body_params):
        ...     request.headers["X-API-Key"] = "secret"
        >>> handler = RequestAuthenticationHandler(add_api_key)
    """

    def __init__(self, signer: RequestSigner) -> None:
        self._signer = signer

    @property
    def is_authenticated(self) -> bool:
        return True

    async def authenticate(self) -> None:
        pass

    def sign(
        self,
        request: httpx.Request,
        query_params: Sequence[tuple[str, str]],
        body_params: Mapping[str, Any],
    ) -> None:
        self._signer(request, query_params, body_params)
