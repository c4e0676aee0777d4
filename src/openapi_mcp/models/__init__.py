"""Data models for openapi-mcp"""

from .api_spec import (
    EndpointTarget,
    ExternalDocs,
    HTTPMethod,
    MediaTypeDefinition,
    OperationDescriptor,
    ParameterDefinition,
    ParameterLocation,
    RequestBodyDefinition,
    ResponseDefinition,
    ValueSchema,
)
from .results import BuiltRequest, ToolResult

__all__ = [
    "HTTPMethod",
    "ParameterLocation",
    "ValueSchema",
    "ParameterDefinition",
    "MediaTypeDefinition",
    "RequestBodyDefinition",
    "ResponseDefinition",
    "ExternalDocs",
    "OperationDescriptor",
    "EndpointTarget",
    "BuiltRequest",
    "ToolResult",
]
