"""Authentication handler interface shared by every strategy"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class AuthenticationHandler(ABC):
    """
    Pluggable request authentication.

    ``authenticate`` runs any out-of-band handshake; ``sign`` augments an
    outgoing request and is a no-op while the handler is unauthenticated.
    """

    @property
    @abstractmethod
    def is_authenticated(self) -> bool:
        """Whether ``sign`` will currently modify requests"""

    @abstractmethod
    async def authenticate(self) -> None:
        """Perform out-of-band authentication"""

    @abstractmethod
    def sign(
        self,
        request: httpx.Request,
        query_params: Sequence[tuple[str, str]],
        body_params: Mapping[str, Any],
    ) -> None:
        """Sign or augment an outgoing request in place"""


class OAuthCredentials(BaseModel):
    """Token and token secret, replaced as one value"""

    model_config = ConfigDict(frozen=True)

    token: str
    secret: str = ""


class TokenAuthenticationHandler(AuthenticationHandler):
    """
    Base for handlers holding credentials obtained by a handshake.

    Credentials live in a single immutable value that ``authenticate``
    swaps in one assignment, so a concurrent ``sign`` reads either the old
    pair or the new one. Handshakes on the same handler run one at a time.
    A failed handshake leaves the previous credentials in place.
    """

    def __init__(self) -> None:
        self._credentials: OAuthCredentials | None = None
        self._lock = asyncio.Lock()

    @property
    def is_authenticated(self) -> bool:
        return self._credentials is not None

    @property
    def credentials(self) -> OAuthCredentials | None:
        """Current credentials snapshot"""
        return self._credentials

    async def authenticate(self) -> None:
        """
        Run the handshake and store the resulting credentials.

        Raises:
            AuthenticationError: If the token endpoint rejects the request or
                returns a malformed response
            httpx.HTTPError: On network failure
        """
        async with self._lock:
            credentials = await self._fetch_credentials()
            self._credentials = credentials
        logger.info(f"✅ {self.__class__.__name__} authenticated")

    @abstractmethod
    async def _fetch_credentials(self) -> OAuthCredentials:
        """Run the handshake and return fresh credentials"""
