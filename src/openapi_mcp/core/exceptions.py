"""Error taxonomy for building, signing and dispatching API calls"""


class OpenAPIToolError(Exception):
    """Base class for all openapi-mcp errors"""


class SpecConfigurationError(OpenAPIToolError):
    """The API description or library configuration cannot be used"""


class UnsupportedSignatureMethodError(SpecConfigurationError):
    """OAuth 1.0a signature method outside HMAC-SHA1, HMAC-SHA256 and PLAINTEXT"""

    def __init__(self, signature_method: str) -> None:
        super().__init__(f"Signature method '{signature_method}' is not supported.")
        self.signature_method = signature_method


class AuthenticationError(OpenAPIToolError):
    """Token handshake failed or the token endpoint returned a malformed response"""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class TransportError(OpenAPIToolError):
    """The primary API call returned a non-success status"""

    def __init__(self, status_code: int, reason: str = "") -> None:
        super().__init__(f"HTTP {status_code} {reason}".rstrip())
        self.status_code = status_code
        self.reason = reason
