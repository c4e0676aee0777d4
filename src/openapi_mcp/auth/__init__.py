"""Authentication strategies for outgoing API requests"""

from .base import AuthenticationHandler, OAuthCredentials, TokenAuthenticationHandler
from .noop import NoOpAuthenticationHandler
from .custom import RequestAuthenticationHandler, RequestSigner
from .oauth1 import OAuth1Handler, SignatureMethod
from .oauth2 import OAuth2ClientCredentialsHandler
from .factory import create_authentication_handler

__all__ = [
    "AuthenticationHandler",
    "TokenAuthenticationHandler",
    "OAuthCredentials",
    "NoOpAuthenticationHandler",
    "RequestAuthenticationHandler",
    "RequestSigner",
    "OAuth1Handler",
    "OAuth2ClientCredentialsHandler",
    "SignatureMethod",
    "create_authentication_handler",
]
