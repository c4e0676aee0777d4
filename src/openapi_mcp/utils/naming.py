"""Tool name and description helpers"""

import re
from collections.abc import Collection

from openapi_mcp.models import OperationDescriptor

MAX_TOOL_NAME_LENGTH = 64
UNNAMED_TOOL = "unnamed_tool"

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_REPEATED_UNDERSCORES = re.compile(r"_{2,}")


def sanitize_tool_name(name: str | None) -> str:
    """
    Sanitize a name to match ``^[A-Za-z0-9_-]{1,64}$``.

    Examples:
        >>> sanitize_tool_name("GET /users/{id}")
        'GET_users_id'
        >>> sanitize_tool_name("2fa-verify")
        '2fa-verify'
        >>> sanitize_tool_name("")
        'unnamed_tool'
    """
    if not name:
        return UNNAMED_TOOL

    result = _INVALID_CHARS.sub("_", name)
    result = _REPEATED_UNDERSCORES.sub("_", result).strip("_")

    if not result:
        return UNNAMED_TOOL

    if len(result) > MAX_TOOL_NAME_LENGTH:
        result = result[:MAX_TOOL_NAME_LENGTH].rstrip("_-")

    return result


def make_tool_name(operation: OperationDescriptor) -> str:
    """Tool name from the operationId, else from method and path"""
    raw_name = operation.operation_id or f"{operation.method.value}_{operation.path.replace('/', '_').lstrip('_')}"
    return sanitize_tool_name(raw_name)


def make_tool_description(operation: OperationDescriptor) -> str:
    """Tool description from summary, description or method and path"""
    return operation.summary or operation.description or f"{operation.method.value} {operation.path}"


def make_unique_tool_name(name: str, method: str, taken: Collection[str]) -> str:
    """
    Disambiguate a tool name that is already taken.

    Tries ``<name>_<METHOD>``, then ``<name>_<METHOD>_2``, ``_3`` and so on.
    The base name is shortened so the suffix survives the length limit.

    Examples:
        >>> make_unique_tool_name("items", "GET", {"items"})
        'items_GET'
        >>> make_unique_tool_name("items", "GET", {"items", "items_GET"})
        'items_GET_2'
    """
    counter = 1
    while True:
        suffix = f"_{method}" if counter == 1 else f"_{method}_{counter}"
        candidate = sanitize_tool_name(name[: MAX_TOOL_NAME_LENGTH - len(suffix)] + suffix)
        if candidate not in taken:
            return candidate
        counter += 1
