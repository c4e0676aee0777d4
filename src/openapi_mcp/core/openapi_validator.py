"""Structural validation of OpenAPI documents before operations are loaded"""

from enum import Enum
from typing import Any

from openapi_mcp.models import ParameterLocation

# Operation keys of an OpenAPI path item
HTTP_METHODS = ["get", "put", "post", "delete", "options", "head", "patch", "trace"]


class OpenAPIVersion(str, Enum):
    """OpenAPI specification versions"""

    SWAGGER_2_0 = "2.0"
    OPENAPI_3_0 = "3.0"
    OPENAPI_3_1 = "3.1"
    UNKNOWN = "unknown"


def get_openapi_version(spec: dict) -> OpenAPIVersion:
    """
    Detect the OpenAPI/Swagger version from a specification.

    Examples:
        >>> get_openapi_version({"openapi": "3.0.3"})
        <OpenAPIVersion.OPENAPI_3_0: '3.0'>
        >>> get_openapi_version({"swagger": "2.0"})
        <OpenAPIVersion.SWAGGER_2_0: '2.0'>
    """
    if "openapi" in spec:
        version_str = str(spec["openapi"])

        if version_str.startswith("3.0"):
            return OpenAPIVersion.OPENAPI_3_0
        elif version_str.startswith("3."):
            # 3.1 and later 3.x releases
            return OpenAPIVersion.OPENAPI_3_1

    if "swagger" in spec and str(spec["swagger"]).startswith("2."):
        return OpenAPIVersion.SWAGGER_2_0

    return OpenAPIVersion.UNKNOWN


def validate_openapi_document(spec: Any) -> list[str]:
    """
    Check that a document can be turned into operations.

    Only the structure the loader relies on is checked: version, info,
    path items, operations and parameter locations. Schemas are not
    validated.

    Args:
        spec: Parsed OpenAPI document

    Returns:
        List of error messages, empty when the document is usable

    Examples:
        >>> validate_openapi_document({"openapi": "3.0.0", "info": {"title": "API", "version": "1"}})
        []
        >>> validate_openapi_document({"swagger": "2.0"})
        ['Swagger 2.0 documents are not supported, convert to OpenAPI 3.x']
    """
    if not isinstance(spec, dict):
        return ["Specification must be a dictionary/object"]

    version = get_openapi_version(spec)

    if version == OpenAPIVersion.SWAGGER_2_0:
        return ["Swagger 2.0 documents are not supported, convert to OpenAPI 3.x"]

    if "openapi" not in spec:
        return ["Missing 'openapi' version field"]

    if version == OpenAPIVersion.UNKNOWN:
        return [f"Unknown or unsupported OpenAPI version: {spec['openapi']}"]

    errors: list[str] = []

    info = spec.get("info")
    if not isinstance(info, dict):
        errors.append("Missing required field: 'info'")
    elif "title" not in info:
        errors.append("Missing required field in info: 'title'")

    paths = spec.get("paths", {})
    if not isinstance(paths, dict):
        errors.append("'paths' must be an object")
        return errors

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            errors.append(f"Path item '{path}' must be an object")
            continue

        errors.extend(_validate_parameters(path_item.get("parameters", []), path))

        for method in HTTP_METHODS:
            if method not in path_item:
                continue
            operation = path_item[method]
            if not isinstance(operation, dict):
                errors.append(f"Operation {method.upper()} {path} must be an object")
                continue
            errors.extend(_validate_parameters(operation.get("parameters", []), f"{method.upper()} {path}"))

    return errors


def _validate_parameters(parameters: Any, where: str) -> list[str]:
    """Validate inline parameter objects; references are checked when resolved"""
    if not isinstance(parameters, list):
        return [f"'parameters' of {where} must be a list"]

    errors: list[str] = []
    locations = {location.value for location in ParameterLocation}

    for index, parameter in enumerate(parameters):
        if not isinstance(parameter, dict):
            errors.append(f"Parameter #{index} of {where} must be an object")
            continue
        if "$ref" in parameter:
            continue
        if not parameter.get("name"):
            errors.append(f"Parameter #{index} of {where} is missing 'name'")
        if parameter.get("in") not in locations:
            errors.append(f"Parameter #{index} of {where} has unsupported location: {parameter.get('in')!r}")

    return errors


def count_operations(spec: dict) -> int:
    """
    Count the number of operations in an OpenAPI spec.

    Examples:
        >>> count_operations({"paths": {"/users": {"get": {}, "post": {}}}})
        2
    """
    paths = spec.get("paths", {})
    if not isinstance(paths, dict):
        return 0

    return sum(
        1
        for path_item in paths.values()
        if isinstance(path_item, dict)
        for method in HTTP_METHODS
        if method in path_item
    )
