"""Utility functions"""

from .naming import make_tool_description, make_tool_name, make_unique_tool_name, sanitize_tool_name
from .url_helpers import (
    build_full_url,
    build_query_string,
    extract_server_url,
    get_signature_base_url,
    is_valid_url,
    percent_encode,
)

__all__ = [
    # URL helpers
    "percent_encode",
    "build_query_string",
    "build_full_url",
    "get_signature_base_url",
    "extract_server_url",
    "is_valid_url",
    # Naming
    "sanitize_tool_name",
    "make_tool_name",
    "make_tool_description",
    "make_unique_tool_name",
]
