"""
Input schema synthesis for API operations.

Turns the parameter and request body schemas of one operation into a single
JSON-Schema-shaped object describing the arguments a tool accepts. Object
request bodies are flattened into top-level properties so body fields can be
passed as ordinary arguments; any other body is exposed as one ``body``
property.
"""

import logging
from typing import Any

from openapi_mcp.core.value_coercion import to_json_text
from openapi_mcp.models import OperationDescriptor, RequestBodyDefinition, ValueSchema

logger = logging.getLogger(__name__)

BODY_PROPERTY = "body"
DEFAULT_MAX_DEPTH = 32


def synthesize_input_schema(
    operation: OperationDescriptor,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> dict[str, Any]:
    """
    Build the input schema of an operation.

    Parameters come first, in declaration order; flattened body fields are
    inserted afterwards and overwrite a parameter of the same name.

    Args:
        operation: Operation to describe
        max_depth: Nesting depth after which nested items/properties are cut off

    Returns:
        ``{"type": "object", "properties": {...}}`` plus ``required`` when
        at least one argument is required

    Examples:
        >>> op = OperationDescriptor(method="GET", path="/users/{id}", parameters=[
        ...     {"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}}])
        >>> synthesize_input_schema(op)
        {'type': 'object', 'properties': {'id': {'type': 'integer'}}, 'required': ['id']}
    """
    properties: dict[str, Any] = {}
    required: list[str] = []

    for parameter in operation.parameters:
        if parameter.value_schema is None:
            continue

        property_schema = convert_value_schema(parameter.value_schema, max_depth=max_depth)
        description = parameter.description or parameter.value_schema.description
        if description:
            property_schema["description"] = description

        properties[parameter.name] = property_schema
        _add_required(required, parameter.name, parameter.required)

    if operation.request_body is not None:
        body_schema = select_json_body_schema(operation.request_body)

        if body_schema is not None:
            if body_schema.type == "object" and body_schema.properties:
                # Flatten object bodies into top-level arguments
                visited = frozenset({id(body_schema)})
                for name, field_schema in body_schema.properties.items():
                    properties[name] = _convert(field_schema, 1, max_depth, visited)
                    _add_required(required, name, name in body_schema.required)
            else:
                properties[BODY_PROPERTY] = convert_value_schema(body_schema, max_depth=max_depth)
                _add_required(required, BODY_PROPERTY, operation.request_body.required)

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required

    logger.debug(f"Synthesized input schema for {operation.method.value} {operation.path}: {schema}")
    return schema


def select_json_body_schema(request_body: RequestBodyDefinition) -> ValueSchema | None:
    """Schema of the first declared media type whose name contains 'json'"""
    for media_type, definition in request_body.content.items():
        if "json" in media_type.lower():
            return definition.value_schema
    return None


def convert_value_schema(schema: ValueSchema, max_depth: int = DEFAULT_MAX_DEPTH) -> dict[str, Any]:
    """
    Convert a value schema into its JSON Schema form.

    Only fields that are set are emitted. A schema reached again through its
    own nested items/properties, or nested deeper than ``max_depth``, keeps
    its type and description but loses its nested structure.
    """
    return _convert(schema, 0, max_depth, frozenset())


def _convert(
    schema: ValueSchema,
    depth: int,
    max_depth: int,
    visited: frozenset[int],
) -> dict[str, Any]:
    result: dict[str, Any] = {}

    if schema.description:
        result["description"] = schema.description

    if schema.type:
        result["type"] = schema.type

    if schema.enum:
        result["enum"] = [value if isinstance(value, str) else to_json_text(value) for value in schema.enum]

    if id(schema) in visited or depth >= max_depth:
        logger.debug(f"Truncating nested schema of type '{schema.type}' at depth {depth}")
    else:
        visited = visited | {id(schema)}

        if schema.type == "array" and schema.items is not None:
            result["items"] = _convert(schema.items, depth + 1, max_depth, visited)

        if schema.type == "object" and schema.properties:
            result["properties"] = {
                name: _convert(property_schema, depth + 1, max_depth, visited)
                for name, property_schema in schema.properties.items()
            }
            if schema.required:
                result["required"] = list(schema.required)

    if schema.format:
        result["format"] = schema.format

    # Constraints
    if schema.minimum is not None:
        result["minimum"] = schema.minimum
    if schema.maximum is not None:
        result["maximum"] = schema.maximum
    if schema.min_length is not None:
        result["minLength"] = schema.min_length
    if schema.max_length is not None:
        result["maxLength"] = schema.max_length
    if schema.pattern:
        result["pattern"] = schema.pattern

    return result


def _add_required(required: list[str], name: str, is_required: bool) -> None:
    if is_required and name not in required:
        required.append(name)
