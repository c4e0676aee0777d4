"""Invocable tools generated from API operations"""

from .openapi_tool import OpenAPITool, build_operation_metadata
from .toolkit import OpenAPIToolkit

__all__ = ["OpenAPITool", "OpenAPIToolkit", "build_operation_metadata"]
