"""openapi-mcp - callable, authenticated tools from OpenAPI descriptions

This library provides:
- OpenAPIToolkit / OpenAPITool: one invocable tool per API operation
- Request building and input schema synthesis from operation descriptors
- Authentication handlers: none, OAuth 2.0 client credentials, OAuth 1.0a, custom
"""

from openapi_mcp.auth import (
    AuthenticationHandler,
    NoOpAuthenticationHandler,
    OAuth1Handler,
    OAuth2ClientCredentialsHandler,
    RequestAuthenticationHandler,
    create_authentication_handler,
)
from openapi_mcp.services import HTTPClient, WebApiCaller
from openapi_mcp.tools import OpenAPITool, OpenAPIToolkit

__version__ = "0.1.0"

__all__ = [
    "OpenAPIToolkit",
    "OpenAPITool",
    "WebApiCaller",
    "HTTPClient",
    "AuthenticationHandler",
    "NoOpAuthenticationHandler",
    "OAuth1Handler",
    "OAuth2ClientCredentialsHandler",
    "RequestAuthenticationHandler",
    "create_authentication_handler",
]
