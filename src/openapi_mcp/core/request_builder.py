"""
Request building for API operations.

Routes a flat map of named arguments into the parts of an HTTP request
declared by the operation: path segments, query string, headers and
cookies. Every argument that is not a declared parameter is a body field.
"""

import logging
from collections.abc import Mapping
from typing import Any

from openapi_mcp.core.exceptions import SpecConfigurationError
from openapi_mcp.core.schema_synthesizer import BODY_PROPERTY
from openapi_mcp.core.value_coercion import to_json_text, to_parameter_string
from openapi_mcp.models import BuiltRequest, EndpointTarget, HTTPMethod, ParameterLocation
from openapi_mcp.utils.url_helpers import build_full_url, percent_encode

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"

# Methods that may carry a request body
BODY_METHODS = frozenset({HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.PATCH})


def resolve_http_method(method: Any) -> HTTPMethod:
    """
    Map an operation's method onto the closed set of supported verbs.

    Raises:
        SpecConfigurationError: If the method is not one of the supported verbs
    """
    if isinstance(method, HTTPMethod):
        return method

    try:
        return HTTPMethod(str(method).upper())
    except ValueError:
        raise SpecConfigurationError(f"Unsupported operation type: {method}") from None


def supports_request_body(method: HTTPMethod) -> bool:
    """Check whether requests with this method carry a body"""
    return method in BODY_METHODS


def build_request(target: EndpointTarget, arguments: Mapping[str, Any]) -> BuiltRequest:
    """
    Build the HTTP request for one invocation of an operation.

    Declared parameters missing from ``arguments`` are skipped, with no
    default substitution. Body fields are only attached for POST, PUT and
    PATCH; other methods drop them.

    Args:
        target: Base URL and operation to call
        arguments: Argument values keyed by parameter or body field name

    Returns:
        BuiltRequest with the resolved URL, headers, optional JSON body and
        the query/body parameters used for signing

    Raises:
        SpecConfigurationError: If the operation's method is not supported
    """
    operation = target.operation
    method = resolve_http_method(operation.method)

    path = operation.path
    query_params: list[tuple[str, str]] = []
    headers: dict[str, str] = {}

    for parameter in operation.parameters:
        if parameter.name not in arguments:
            continue

        value = to_parameter_string(arguments[parameter.name])

        if parameter.location == ParameterLocation.PATH:
            path = path.replace(f"{{{parameter.name}}}", percent_encode(value))
        elif parameter.location == ParameterLocation.QUERY:
            query_params.append((parameter.name, value))
        elif parameter.location == ParameterLocation.HEADER:
            headers[parameter.name] = value
        elif parameter.location == ParameterLocation.COOKIE:
            cookie = f"{parameter.name}={value}"
            if "Cookie" in headers:
                headers["Cookie"] = f"{headers['Cookie']}; {cookie}"
            else:
                headers["Cookie"] = cookie

    declared = operation.parameter_names()
    body_params = {name: value for name, value in arguments.items() if name not in declared}

    url = build_full_url(target.base_url, path, query_params)

    body: str | None = None
    content_type: str | None = None

    if body_params and supports_request_body(method):
        if len(body_params) == 1 and BODY_PROPERTY in body_params:
            payload = body_params[BODY_PROPERTY]
        else:
            payload = body_params
        body = to_json_text(payload)
        content_type = JSON_CONTENT_TYPE
    elif body_params:
        logger.debug(f"Dropping body fields {sorted(body_params)} for {method.value} {url}")

    return BuiltRequest(
        method=method,
        url=url,
        headers=headers,
        body=body,
        content_type=content_type,
        query_params=query_params,
        body_params=body_params,
    )
