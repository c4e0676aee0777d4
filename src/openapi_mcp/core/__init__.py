"""Core request building, schema synthesis and document loading"""

from .exceptions import (
    AuthenticationError,
    OpenAPIToolError,
    SpecConfigurationError,
    TransportError,
    UnsupportedSignatureMethodError,
)
from .openapi_validator import OpenAPIVersion, get_openapi_version, validate_openapi_document
from .request_builder import build_request, resolve_http_method, supports_request_body
from .schema_synthesizer import convert_value_schema, synthesize_input_schema
from .spec_loader import load_openapi_document, load_operations
from .value_coercion import to_json_text, to_parameter_string

__all__ = [
    # Errors
    "OpenAPIToolError",
    "SpecConfigurationError",
    "UnsupportedSignatureMethodError",
    "AuthenticationError",
    "TransportError",
    # Request building
    "build_request",
    "resolve_http_method",
    "supports_request_body",
    "to_parameter_string",
    "to_json_text",
    # Schema synthesis
    "synthesize_input_schema",
    "convert_value_schema",
    # Document loading
    "OpenAPIVersion",
    "get_openapi_version",
    "validate_openapi_document",
    "load_openapi_document",
    "load_operations",
]
