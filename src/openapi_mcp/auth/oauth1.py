"""
OAuth 1.0a authentication.

Implements the two-legged token handshake (request token, then access
token, with an out-of-band callback) and per-request HMAC-SHA1,
HMAC-SHA256 or PLAINTEXT signing as described in RFC 5849.
"""

import base64
import hashlib
import hmac
import logging
import time
import uuid
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any
from urllib.parse import parse_qs

import httpx

from openapi_mcp.core.exceptions import AuthenticationError, UnsupportedSignatureMethodError
from openapi_mcp.core.value_coercion import to_parameter_string
from openapi_mcp.services.http_client import HTTPClient
from openapi_mcp.utils.url_helpers import get_signature_base_url, percent_encode

from .base import OAuthCredentials, TokenAuthenticationHandler

logger = logging.getLogger(__name__)

OAUTH_VERSION = "1.0"
OAUTH_CALLBACK_OOB = "oob"  # out-of-band, server-to-server
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class SignatureMethod(str, Enum):
    """OAuth 1.0a signature methods"""

    HMAC_SHA1 = "HMAC-SHA1"
    HMAC_SHA256 = "HMAC-SHA256"
    PLAINTEXT = "PLAINTEXT"


def parse_signature_method(value: "str | SignatureMethod") -> SignatureMethod:
    """
    Parse a signature method name.

    Raises:
        UnsupportedSignatureMethodError: If the method is not supported
    """
    try:
        return SignatureMethod(value)
    except ValueError:
        raise UnsupportedSignatureMethodError(str(value)) from None


def build_signature_base_string(method: str, url: str, params: Mapping[str, str]) -> str:
    """
    Build the OAuth 1.0a signature base string.

    Parameters are sorted by name (case-sensitive), each key and value is
    percent-encoded, and the joined parameter string is encoded again.

    Examples:
        >>> build_signature_base_string("get", "https://example.com/a?x=1", {"b": "2", "a": "1"})
        'GET&https%3A%2F%2Fexample.com%2Fa&a%3D1%26b%3D2'
    """
    parameter_string = "&".join(
        f"{percent_encode(key)}={percent_encode(value)}" for key, value in sorted(params.items())
    )
    base_url = get_signature_base_url(url)
    return f"{method.upper()}&{percent_encode(base_url)}&{percent_encode(parameter_string)}"


def build_signing_key(consumer_secret: str, token_secret: str) -> str:
    """Signing key: encoded consumer secret and token secret joined by '&'"""
    return f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"


def compute_signature(signature_method: "str | SignatureMethod", base_string: str, signing_key: str) -> str:
    """
    Sign a base string.

    HMAC methods return the base64 digest of the base string keyed with the
    signing key. PLAINTEXT returns the signing key itself.

    Raises:
        UnsupportedSignatureMethodError: If the method is not supported
    """
    method = parse_signature_method(signature_method)

    if method == SignatureMethod.PLAINTEXT:
        return signing_key

    digestmod = hashlib.sha1 if method == SignatureMethod.HMAC_SHA1 else hashlib.sha256
    digest = hmac.new(signing_key.encode("ascii"), base_string.encode("ascii"), digestmod).digest()
    return base64.b64encode(digest).decode("ascii")


def build_authorization_header(oauth_params: Mapping[str, str]) -> str:
    """
    Build the ``Authorization`` header value for OAuth parameters.

    Examples:
        >>> build_authorization_header({"oauth_version": "1.0", "oauth_nonce": "abc"})
        'OAuth oauth_nonce="abc", oauth_version="1.0"'
    """
    pairs = ", ".join(
        f'{percent_encode(key)}="{percent_encode(value)}"' for key, value in sorted(oauth_params.items())
    )
    return f"OAuth {pairs}"


def parse_token_response(body: str) -> OAuthCredentials:
    """
    Parse an ``application/x-www-form-urlencoded`` token response.

    Raises:
        AuthenticationError: If ``oauth_token`` or ``oauth_token_secret`` is
            missing or empty
    """
    values = parse_qs(body, keep_blank_values=True)
    token = values.get("oauth_token", [""])[0]
    token_secret = values.get("oauth_token_secret", [""])[0]

    if not token:
        raise AuthenticationError(f"OAuth response does not contain 'oauth_token'. Response: {body}")
    if not token_secret:
        raise AuthenticationError(f"OAuth response does not contain 'oauth_token_secret'. Response: {body}")

    return OAuthCredentials(token=token, secret=token_secret)


class OAuth1Handler(TokenAuthenticationHandler):
    """
    OAuth 1.0a authentication handler.

    ``authenticate`` obtains a request token and immediately exchanges it for
    an access token (no user authorization step). Every signed request gets a
    fresh nonce and timestamp.
    """

    def __init__(
        self,
        http_client: HTTPClient,
        request_token_url: str,
        access_token_url: str,
        consumer_key: str,
        consumer_secret: str,
        signature_method: "str | SignatureMethod" = SignatureMethod.HMAC_SHA1,
    ) -> None:
        """
        Initialize the handler.

        Args:
            http_client: Transport used for the token requests
            request_token_url: Request token endpoint
            access_token_url: Access token endpoint
            consumer_key: Consumer key (API key)
            consumer_secret: Consumer secret (API secret)
            signature_method: HMAC-SHA1 (default), HMAC-SHA256 or PLAINTEXT

        Raises:
            UnsupportedSignatureMethodError: If the signature method is unknown
        """
        super().__init__()
        self.http_client = http_client
        self.request_token_url = request_token_url
        self.access_token_url = access_token_url
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.signature_method = parse_signature_method(signature_method)

    async def _fetch_credentials(self) -> OAuthCredentials:
        request_token = await self.request_token()
        return await self.exchange_for_access_token(request_token.token, request_token.secret)

    async def request_token(self) -> OAuthCredentials:
        """Obtain a request token and its secret"""
        oauth_params = self.get_oauth_parameters(None)
        oauth_params["oauth_callback"] = OAUTH_CALLBACK_OOB
        return await self._request_credentials(self.request_token_url, oauth_params, "", "request token")

    async def exchange_for_access_token(self, request_token: str, request_token_secret: str) -> OAuthCredentials:
        """Exchange a request token for the final access token and secret"""
        oauth_params = self.get_oauth_parameters(request_token)
        return await self._request_credentials(
            self.access_token_url, oauth_params, request_token_secret, "access token"
        )

    async def _request_credentials(
        self,
        url: str,
        oauth_params: dict[str, str],
        token_secret: str,
        step: str,
    ) -> OAuthCredentials:
        oauth_params["oauth_signature"] = self.generate_signature("POST", url, oauth_params, token_secret)

        response = await self.http_client.post_form(
            url,
            headers={"Authorization": build_authorization_header(oauth_params)},
        )

        if not response.is_success:
            raise AuthenticationError(
                f"Failed to obtain OAuth 1.0a {step}. "
                f"Status: {response.status_code}, Response: {response.text}",
                status_code=response.status_code,
                response_body=response.text,
            )

        return parse_token_response(response.text)

    def sign(
        self,
        request: httpx.Request,
        query_params: Sequence[tuple[str, str]],
        body_params: Mapping[str, Any],
    ) -> None:
        credentials = self._credentials
        if credentials is None:
            return

        oauth_params = self.get_oauth_parameters(credentials.token)
        all_params = dict(oauth_params)

        for key, value in query_params:
            all_params[key] = value

        # Body parameters are only signed for form-encoded bodies
        content_type = request.headers.get("Content-Type", "")
        if content_type.split(";")[0].strip().lower() == FORM_CONTENT_TYPE:
            for key, value in body_params.items():
                all_params[key] = to_parameter_string(value)

        oauth_params["oauth_signature"] = self.generate_signature(
            request.method, str(request.url), all_params, credentials.secret
        )
        request.headers["Authorization"] = build_authorization_header(oauth_params)

    def get_oauth_parameters(self, token: str | None) -> dict[str, str]:
        """Protocol parameters with a fresh nonce and timestamp"""
        return {
            "oauth_consumer_key": self.consumer_key,
            "oauth_nonce": self._generate_nonce(),
            "oauth_signature_method": self.signature_method.value,
            "oauth_timestamp": self._generate_timestamp(),
            "oauth_token": token or "",
            "oauth_version": OAUTH_VERSION,
        }

    def generate_signature(self, method: str, url: str, params: Mapping[str, str], token_secret: str) -> str:
        """Sign a request with the consumer secret and the given token secret"""
        logger.debug(f"Signing {method.upper()} {get_signature_base_url(url)} with {self.signature_method.value}")
        base_string = build_signature_base_string(method, url, params)
        signing_key = build_signing_key(self.consumer_secret, token_secret)
        return compute_signature(self.signature_method, base_string, signing_key)

    @staticmethod
    def _generate_nonce() -> str:
        return uuid.uuid4().hex

    @staticmethod
    def _generate_timestamp() -> str:
        return str(int(time.time()))
