"""HTTP services"""

from .api_caller import WebApiCaller
from .http_client import HTTPClient

__all__ = ["HTTPClient", "WebApiCaller"]
