"""
OpenAPI document loading.

Parses an OpenAPI 3.x document (dict, JSON/YAML text or file) and turns
each path + method combination into an ``OperationDescriptor``. Local
``$ref`` pointers are resolved; a schema that refers back to itself
resolves to the same shared ``ValueSchema`` instance, producing a cyclic
graph that the schema synthesizer cuts off.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from openapi_mcp.core.exceptions import SpecConfigurationError
from openapi_mcp.core.openapi_validator import HTTP_METHODS, count_operations, validate_openapi_document
from openapi_mcp.models import (
    ExternalDocs,
    HTTPMethod,
    MediaTypeDefinition,
    OperationDescriptor,
    ParameterDefinition,
    RequestBodyDefinition,
    ResponseDefinition,
    ValueSchema,
)

logger = logging.getLogger(__name__)

# Maximum chain of $ref -> $ref hops for non-schema objects
MAX_REF_HOPS = 32


def load_openapi_document(source: dict | str | Path) -> dict[str, Any]:
    """
    Load and validate an OpenAPI document.

    Args:
        source: Parsed document, JSON/YAML text, or a ``Path`` to a file

    Returns:
        The document as a dictionary

    Raises:
        SpecConfigurationError: If the source cannot be parsed or is not a
            usable OpenAPI 3.x document
    """
    if isinstance(source, Path):
        try:
            source = source.read_text(encoding="utf-8")
        except OSError as e:
            raise SpecConfigurationError(f"Failed to read OpenAPI spec: {e}") from e

    if isinstance(source, str):
        try:
            # YAML is a superset of JSON
            document = yaml.safe_load(source)
        except yaml.YAMLError as e:
            raise SpecConfigurationError(f"Failed to parse OpenAPI spec: {e}") from e
    else:
        document = source

    errors = validate_openapi_document(document)
    if errors:
        raise SpecConfigurationError(f"Failed to parse OpenAPI spec: {', '.join(errors)}")

    logger.info(f"✅ Loaded OpenAPI spec '{document['info'].get('title', '')}' with {count_operations(document)} operations")
    return document


def load_operations(document: dict[str, Any]) -> list[OperationDescriptor]:
    """
    Build an operation descriptor for every operation in a document.

    Path-level parameters apply to every operation of the path; an
    operation-level parameter with the same name and location replaces it.

    Args:
        document: Validated OpenAPI document

    Returns:
        Operations in document order (paths, then methods)

    Raises:
        SpecConfigurationError: If a reference cannot be resolved or an
            operation does not form a valid descriptor
    """
    resolver = _DocumentResolver(document)
    operations: list[OperationDescriptor] = []

    for path, path_item in document.get("paths", {}).items():
        shared_parameters = path_item.get("parameters", [])

        for method in HTTP_METHODS:
            if method not in path_item:
                continue
            try:
                operations.append(resolver.build_operation(path, method, path_item[method], shared_parameters))
            except ValidationError as e:
                raise SpecConfigurationError(f"Invalid operation {method.upper()} {path}: {e}") from e

    return operations


class _DocumentResolver:
    """Resolves local references and builds models for one document"""

    def __init__(self, document: dict[str, Any]) -> None:
        self.document = document
        self._schemas: dict[str, ValueSchema] = {}

    def build_operation(
        self,
        path: str,
        method: str,
        operation: dict[str, Any],
        shared_parameters: list[Any],
    ) -> OperationDescriptor:
        parameters: dict[tuple[str, str], ParameterDefinition] = {}
        for raw in [*shared_parameters, *operation.get("parameters", [])]:
            parameter = self.build_parameter(self.resolve(raw))
            parameters[(parameter.name, parameter.location.value)] = parameter

        request_body = None
        if isinstance(operation.get("requestBody"), dict):
            request_body = self.build_request_body(self.resolve(operation["requestBody"]))

        responses = {
            str(code): ResponseDefinition(description=self.resolve(response).get("description"))
            for code, response in (operation.get("responses") or {}).items()
            if isinstance(response, dict)
        }

        external_docs = None
        if isinstance(operation.get("externalDocs"), dict):
            external_docs = ExternalDocs(
                url=operation["externalDocs"].get("url"),
                description=operation["externalDocs"].get("description"),
            )

        return OperationDescriptor(
            method=HTTPMethod(method.upper()),
            path=path,
            operation_id=operation.get("operationId"),
            summary=operation.get("summary"),
            description=operation.get("description"),
            parameters=list(parameters.values()),
            request_body=request_body,
            responses=responses,
            tags=[str(tag) for tag in operation.get("tags", [])],
            deprecated=bool(operation.get("deprecated", False)),
            external_docs=external_docs,
            extensions={key: value for key, value in operation.items() if key.startswith("x-")},
        )

    def build_parameter(self, raw: dict[str, Any]) -> ParameterDefinition:
        schema = raw.get("schema")
        return ParameterDefinition(
            name=raw.get("name", ""),
            location=raw.get("in"),
            required=bool(raw.get("required", False)),
            value_schema=self.build_schema(schema) if isinstance(schema, dict) else None,
            description=raw.get("description"),
        )

    def build_request_body(self, raw: dict[str, Any]) -> RequestBodyDefinition:
        content = {}
        for media_type, definition in (raw.get("content") or {}).items():
            schema = definition.get("schema") if isinstance(definition, dict) else None
            content[media_type] = MediaTypeDefinition(
                value_schema=self.build_schema(schema) if isinstance(schema, dict) else None
            )

        return RequestBodyDefinition(
            content=content,
            required=bool(raw.get("required", False)),
            description=raw.get("description"),
        )

    def build_schema(self, node: dict[str, Any]) -> ValueSchema:
        """Build a value schema, sharing one instance per referenced definition"""
        ref = node.get("$ref")
        if ref is not None:
            if ref in self._schemas:
                return self._schemas[ref]

            # Register a placeholder first so self-references find it
            placeholder = ValueSchema.model_construct()
            self._schemas[ref] = placeholder
            built = self.build_schema(self.lookup(ref))
            for field_name in ValueSchema.model_fields:
                setattr(placeholder, field_name, getattr(built, field_name))
            return placeholder

        if "allOf" in node and "type" not in node:
            node = self._merge_all_of(node)

        items = node.get("items")
        properties = node.get("properties") or {}

        return ValueSchema(
            type=_schema_type(node.get("type")),
            format=node.get("format"),
            description=node.get("description"),
            enum=node.get("enum"),
            minimum=node.get("minimum"),
            maximum=node.get("maximum"),
            min_length=node.get("minLength"),
            max_length=node.get("maxLength"),
            pattern=node.get("pattern"),
            items=self.build_schema(items) if isinstance(items, dict) else None,
            properties={
                name: self.build_schema(schema)
                for name, schema in properties.items()
                if isinstance(schema, dict)
            },
            required=list(node.get("required") or []),
        )

    def _merge_all_of(self, node: dict[str, Any]) -> dict[str, Any]:
        """Combine ``allOf`` object parts into one object schema"""
        merged: dict[str, Any] = {key: value for key, value in node.items() if key != "allOf"}
        properties: dict[str, Any] = dict(node.get("properties") or {})
        required: list[str] = list(node.get("required") or [])

        for part in node["allOf"]:
            part = self.resolve(part) if isinstance(part, dict) else {}
            properties.update(part.get("properties") or {})
            required.extend(name for name in part.get("required") or [] if name not in required)
            if "description" in part:
                merged.setdefault("description", part["description"])

        merged["type"] = "object"
        merged["properties"] = properties
        merged["required"] = required
        return merged

    def resolve(self, node: dict[str, Any]) -> dict[str, Any]:
        """Follow ``$ref`` hops until a concrete object is reached"""
        for _ in range(MAX_REF_HOPS):
            if "$ref" not in node:
                return node
            node = self.lookup(node["$ref"])
        raise SpecConfigurationError(f"Reference chain too long or circular at {node.get('$ref')}")

    def lookup(self, ref: str) -> dict[str, Any]:
        """Resolve a local JSON pointer such as ``#/components/schemas/User``"""
        if not ref.startswith("#/"):
            raise SpecConfigurationError(f"Only local references are supported: {ref}")

        target: Any = self.document
        for token in ref[2:].split("/"):
            token = token.replace("~1", "/").replace("~0", "~")
            if not isinstance(target, dict) or token not in target:
                raise SpecConfigurationError(f"Unresolvable reference: {ref}")
            target = target[token]

        if not isinstance(target, dict):
            raise SpecConfigurationError(f"Reference does not point to an object: {ref}")
        return target


def _schema_type(value: Any) -> str | None:
    """Schema type, taking the first non-null entry of a 3.1 type list"""
    if isinstance(value, list):
        return next((item for item in value if item != "null"), None)
    return value
