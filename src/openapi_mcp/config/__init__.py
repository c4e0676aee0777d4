"""Configuration management for openapi-mcp"""

from .settings import Settings, get_settings, validate_environment

__all__ = ["Settings", "get_settings", "validate_environment"]
