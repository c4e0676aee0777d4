"""A single invocable tool backed by one API operation"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from openapi_mcp.core.schema_synthesizer import DEFAULT_MAX_DEPTH, synthesize_input_schema
from openapi_mcp.core.value_coercion import to_parameter_string
from openapi_mcp.models import EndpointTarget, OperationDescriptor, ToolResult
from openapi_mcp.services.api_caller import WebApiCaller

logger = logging.getLogger(__name__)


class OpenAPITool:
    """
    Tool generated from one API operation.

    The input schema is synthesized once, at construction. ``invoke`` never
    raises for a failed call: every error becomes an error-tagged result.
    Task cancellation is not an error and propagates to the caller.
    """

    def __init__(
        self,
        name: str,
        description: str,
        target: EndpointTarget,
        api_caller: WebApiCaller,
        max_schema_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """
        Initialize the tool.

        Args:
            name: Tool name exposed to callers
            description: Human-readable description
            target: Base URL and operation the tool calls
            api_caller: Caller shared by the tools of one API
            max_schema_depth: Nesting depth limit for the input schema
        """
        self.name = name
        self.description = description
        self.target = target
        self.api_caller = api_caller
        self.input_schema = synthesize_input_schema(target.operation, max_depth=max_schema_depth)
        self.metadata = build_operation_metadata(target.operation)

    async def invoke(self, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        """
        Call the operation with the given arguments.

        Returns:
            ToolResult with the pretty-printed JSON response, or
            ``is_error=True`` and the error message
        """
        try:
            response = await self.api_caller.call_api(self.target, arguments or {})
            return ToolResult(content=json.dumps(response, indent=2, ensure_ascii=False))
        except Exception as e:
            logger.error(f"❌ Error invoking tool {self.name}: {e}")
            return ToolResult(content=f"Error calling API: {e}", is_error=True)

    def to_dict(self) -> dict[str, Any]:
        """Tool listing entry: name, description and input schema"""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

    def __repr__(self) -> str:
        operation = self.target.operation
        return f"OpenAPITool(name={self.name!r}, method={operation.method.value}, path={operation.path!r})"


def build_operation_metadata(operation: OperationDescriptor) -> dict[str, Any]:
    """
    Describe an operation for tool listings.

    Always contains ``path`` and ``method``; ``operationId``, ``deprecated``,
    ``tags``, ``externalDocs``, ``responses`` and ``extensions`` only when
    the operation declares them.
    """
    metadata: dict[str, Any] = {
        "path": operation.path,
        "method": operation.method.value,
    }

    if operation.operation_id:
        metadata["operationId"] = operation.operation_id

    if operation.deprecated:
        metadata["deprecated"] = True

    if operation.tags:
        metadata["tags"] = list(operation.tags)

    if operation.external_docs is not None:
        metadata["externalDocs"] = {
            "url": operation.external_docs.url or "",
            "description": operation.external_docs.description or "",
        }

    if operation.responses:
        metadata["responses"] = {
            code: response.description or "" for code, response in operation.responses.items()
        }

    if operation.extensions:
        metadata["extensions"] = {
            key: to_parameter_string(value) for key, value in operation.extensions.items()
        }

    return metadata
