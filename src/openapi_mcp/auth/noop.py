"""Authentication handler for APIs that need none"""

from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from .base import AuthenticationHandler


class NoOpAuthenticationHandler(AuthenticationHandler):
    """Always authenticated; leaves requests untouched"""

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
        pass
