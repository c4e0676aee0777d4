"""
Tool collection generated from a whole OpenAPI document.

Usage:
    async with OpenAPIToolkit.from_spec(Path("openapi.yaml")) as toolkit:
        await toolkit.authenticate()
        result = await toolkit.invoke("getUser", {"id": 1})
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from openapi_mcp.auth.base import AuthenticationHandler
from openapi_mcp.auth.factory import create_authentication_handler
from openapi_mcp.config import Settings, get_settings
from openapi_mcp.core.exceptions import SpecConfigurationError
from openapi_mcp.core.spec_loader import load_openapi_document, load_operations
from openapi_mcp.models import EndpointTarget, ToolResult
from openapi_mcp.services.api_caller import WebApiCaller
from openapi_mcp.services.http_client import HTTPClient
from openapi_mcp.utils.naming import make_tool_description, make_tool_name, make_unique_tool_name
from openapi_mcp.utils.url_helpers import extract_server_url, is_valid_url

from .openapi_tool import OpenAPITool

logger = logging.getLogger(__name__)


class OpenAPIToolkit:
    """Tools for every operation of one API, sharing one caller"""

    def __init__(
        self,
        tools: list[OpenAPITool],
        api_caller: WebApiCaller,
        owns_http_client: bool = False,
    ) -> None:
        self.api_caller = api_caller
        self._tools: dict[str, OpenAPITool] = {tool.name: tool for tool in tools}
        self._owns_http_client = owns_http_client

    @classmethod
    def from_spec(
        cls,
        source: dict | str | Path,
        base_url: str | None = None,
        auth_handler: AuthenticationHandler | None = None,
        http_client: HTTPClient | None = None,
        settings: Settings | None = None,
    ) -> "OpenAPIToolkit":
        """
        Create one tool per operation of an OpenAPI document.

        Args:
            source: Parsed document, JSON/YAML text, or a ``Path`` to a file
            base_url: API base URL (default: first ``servers`` entry)
            auth_handler: Request signer (default: the handler selected by
                ``AUTH_TYPE``, using the toolkit's transport)
            http_client: Shared transport; created and owned by the toolkit if omitted
            settings: Settings to read (default: cached environment settings)

        Returns:
            Toolkit with one tool per operation

        Raises:
            SpecConfigurationError: If the document is unusable or no valid
                base URL is available
        """
        settings = settings or get_settings()
        document = load_openapi_document(source)

        base_url = base_url or extract_server_url(document.get("servers"))
        if not is_valid_url(base_url):
            raise SpecConfigurationError(
                f"No absolute base URL available (got {base_url!r}); pass base_url explicitly"
            )

        owns_http_client = http_client is None
        http_client = http_client or HTTPClient()
        if auth_handler is None:
            auth_handler = create_authentication_handler(http_client, settings)
        api_caller = WebApiCaller(http_client, auth_handler)

        tools: list[OpenAPITool] = []
        names: set[str] = set()

        for operation in load_operations(document):
            name = make_tool_name(operation)
            if name in names:
                unique = make_unique_tool_name(name, operation.method.value, names)
                logger.warning(f"⚠️  Duplicate tool name '{name}', registering as '{unique}'")
                name = unique
            names.add(name)

            tools.append(
                OpenAPITool(
                    name,
                    make_tool_description(operation),
                    EndpointTarget(base_url=base_url, operation=operation),
                    api_caller,
                    max_schema_depth=settings.schema_max_depth,
                )
            )

        logger.info(f"✅ Created {len(tools)} tools for {base_url}")
        return cls(tools, api_caller, owns_http_client=owns_http_client)

    def list_tools(self) -> list[OpenAPITool]:
        """All tools, in document order"""
        return list(self._tools.values())

    def get_tool(self, name: str) -> OpenAPITool | None:
        """Tool by name, or None"""
        return self._tools.get(name)

    async def invoke(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        """
        Invoke a tool by name.

        An unknown name yields an error-tagged result, like any other failure.
        """
        tool = self._tools.get(name)
        if tool is None:
            logger.error(f"❌ Unknown tool: {name}")
            return ToolResult(content=f"Error calling API: unknown tool '{name}'", is_error=True)
        return await tool.invoke(arguments)

    async def authenticate(self) -> None:
        """
        Run the authentication handshake.

        Raises:
            AuthenticationError: If the handshake fails
        """
        await self.api_caller.auth_handler.authenticate()

    async def aclose(self) -> None:
        """Close the HTTP client if the toolkit created it."""
        if self._owns_http_client:
            await self.api_caller.http_client.aclose()

    async def __aenter__(self) -> "OpenAPIToolkit":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __len__(self) -> int:
        return len(self._tools)
