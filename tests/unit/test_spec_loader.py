"""Tests for OpenAPI document loading"""

import json
from pathlib import Path

import pytest

from openapi_mcp.core import SpecConfigurationError, load_openapi_document, load_operations
from openapi_mcp.models import HTTPMethod, ParameterLocation

USERS_YAML = """
openapi: 3.0.3
info:
  title: Users API
  version: 1.0.0
servers:
  - url: https://api.example.com/v1
paths:
  /users:
    get:
      operationId: listUsers
      summary: List users
      parameters:
        - $ref: '#/components/parameters/Limit'
      responses:
        '200':
          description: A list of users
    post:
      operationId: createUser
      requestBody:
        required: true
        content:
          application/json:
            schema:
              $ref: '#/components/schemas/NewUser'
      responses:
        '201':
          $ref: '#/components/responses/Created'
  /users/{id}:
    parameters:
      - name: id
        in: path
        required: true
        schema:
          type: integer
    get:
      operationId: getUser
      tags: [users]
      deprecated: true
      x-rate-limit: 100
      externalDocs:
        url: https://docs.example.com/users
    delete:
      operationId: deleteUser
      parameters:
        - name: id
          in: path
          required: true
          description: ID to delete
          schema:
            type: string
components:
  parameters:
    Limit:
      name: limit
      in: query
      schema:
        type: integer
        minimum: 1
  responses:
    Created:
      description: Created
  schemas:
    NewUser:
      type: object
      required: [name]
      properties:
        name:
          type: string
        email:
          type: string
          format: email
"""


class TestLoadOpenapiDocument:
    """Tests for load_openapi_document function"""

    def test_loads_yaml_text(self) -> None:
        """Test YAML text is parsed"""
        document = load_openapi_document(USERS_YAML)
        assert document["info"]["title"] == "Users API"

    def test_loads_json_text(self) -> None:
        """Test JSON text is parsed"""
        text = json.dumps({"openapi": "3.1.0", "info": {"title": "API", "version": "1"}, "paths": {}})
        assert load_openapi_document(text)["openapi"] == "3.1.0"

    def test_loads_dict(self) -> None:
        """Test an already parsed document is accepted"""
        document = {"openapi": "3.0.0", "info": {"title": "API", "version": "1"}, "paths": {}}
        assert load_openapi_document(document) is document

    def test_loads_file(self, tmp_path: Path) -> None:
        """Test a Path is read from disk"""
        spec_file = tmp_path / "openapi.yaml"
        spec_file.write_text(USERS_YAML, encoding="utf-8")
        assert load_openapi_document(spec_file)["info"]["title"] == "Users API"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test an unreadable file is a configuration error"""
        with pytest.raises(SpecConfigurationError, match="Failed to read"):
            load_openapi_document(tmp_path / "missing.yaml")

    def test_invalid_yaml(self) -> None:
        """Test unparseable text is a configuration error"""
        with pytest.raises(SpecConfigurationError, match="Failed to parse"):
            load_openapi_document("openapi: [3.0")

    def test_rejects_swagger(self) -> None:
        """Test Swagger 2.0 documents are rejected"""
        with pytest.raises(SpecConfigurationError, match="Swagger 2.0"):
            load_openapi_document({"swagger": "2.0", "info": {"title": "API"}, "paths": {}})

    def test_rejects_non_document(self) -> None:
        """Test text that is not a mapping is rejected"""
        with pytest.raises(SpecConfigurationError, match="dictionary"):
            load_openapi_document("just a string")


class TestLoadOperations:
    """Tests for load_operations function"""

    @pytest.fixture
    def operations(self) -> dict:
        document = load_openapi_document(USERS_YAML)
        return {(op.method, op.path): op for op in load_operations(document)}

    def test_document_order(self) -> None:
        """Test operations come out path by path"""
        operations = load_operations(load_openapi_document(USERS_YAML))
        assert [op.operation_id for op in operations] == ["listUsers", "createUser", "getUser", "deleteUser"]

    def test_parameter_reference(self, operations: dict) -> None:
        """Test a referenced parameter is resolved"""
        operation = operations[(HTTPMethod.GET, "/users")]
        parameter = operation.parameters[0]

        assert parameter.name == "limit"
        assert parameter.location == ParameterLocation.QUERY
        assert parameter.value_schema.minimum == 1

    def test_request_body_reference(self, operations: dict) -> None:
        """Test a referenced body schema is resolved"""
        operation = operations[(HTTPMethod.POST, "/users")]
        schema = operation.request_body.content["application/json"].value_schema

        assert operation.request_body.required is True
        assert schema.type == "object"
        assert schema.required == ["name"]
        assert schema.properties["email"].format == "email"

    def test_response_reference(self, operations: dict) -> None:
        """Test a referenced response keeps its description"""
        operation = operations[(HTTPMethod.POST, "/users")]
        assert operation.responses["201"].description == "Created"

    def test_path_level_parameters(self, operations: dict) -> None:
        """Test path-level parameters apply to every operation of the path"""
        operation = operations[(HTTPMethod.GET, "/users/{id}")]
        assert [p.name for p in operation.parameters] == ["id"]
        assert operation.parameters[0].value_schema.type == "integer"

    def test_operation_parameter_overrides_path_parameter(self, operations: dict) -> None:
        """Test an operation parameter replaces a path-level one of the same name and location"""
        operation = operations[(HTTPMethod.DELETE, "/users/{id}")]

        assert len(operation.parameters) == 1
        assert operation.parameters[0].value_schema.type == "string"
        assert operation.parameters[0].description == "ID to delete"

    def test_operation_metadata(self, operations: dict) -> None:
        """Test tags, deprecation, external docs and extensions are kept"""
        operation = operations[(HTTPMethod.GET, "/users/{id}")]

        assert operation.tags == ["users"]
        assert operation.deprecated is True
        assert operation.external_docs.url == "https://docs.example.com/users"
        assert operation.extensions == {"x-rate-limit": 100}

    def test_recursive_schema(self) -> None:
        """Test a self-referencing schema becomes a shared instance"""
        document = {
            "openapi": "3.0.0",
            "info": {"title": "Tree API", "version": "1"},
            "paths": {
                "/nodes": {
                    "post": {
                        "requestBody": {
                            "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Node"}}}
                        }
                    }
                }
            },
            "components": {
                "schemas": {
                    "Node": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string"},
                            "children": {"type": "array", "items": {"$ref": "#/components/schemas/Node"}},
                        },
                    }
                }
            },
        }

        (operation,) = load_operations(load_openapi_document(document))
        node = operation.request_body.content["application/json"].value_schema

        assert node.type == "object"
        assert node.properties["children"].items is node

    def test_all_of_is_merged(self) -> None:
        """Test allOf parts are combined into one object schema"""
        document = {
            "openapi": "3.0.0",
            "info": {"title": "API", "version": "1"},
            "paths": {
                "/admins": {
                    "post": {
                        "requestBody": {
                            "content": {
                                "application/json": {
                                    "schema": {
                                        "allOf": [
                                            {"$ref": "#/components/schemas/User"},
                                            {"properties": {"level": {"type": "integer"}}, "required": ["level"]},
                                        ]
                                    }
                                }
                            }
                        }
                    }
                }
            },
            "components": {
                "schemas": {
                    "User": {
                        "type": "object",
                        "properties": {"name": {"type": "string"}},
                        "required": ["name"],
                    }
                }
            },
        }

        (operation,) = load_operations(load_openapi_document(document))
        schema = operation.request_body.content["application/json"].value_schema

        assert schema.type == "object"
        assert set(schema.properties) == {"name", "level"}
        assert schema.required == ["name", "level"]

    def test_nullable_type_list(self) -> None:
        """Test a 3.1 type list resolves to its non-null type"""
        document = {
            "openapi": "3.1.0",
            "info": {"title": "API", "version": "1"},
            "paths": {
                "/users": {
                    "get": {"parameters": [{"name": "q", "in": "query", "schema": {"type": ["null", "string"]}}]}
                }
            },
        }

        (operation,) = load_operations(load_openapi_document(document))

        assert operation.parameters[0].value_schema.type == "string"

    def test_unresolvable_reference(self) -> None:
        """Test a dangling reference is a configuration error"""
        document = {
            "openapi": "3.0.0",
            "info": {"title": "API", "version": "1"},
            "paths": {"/users": {"get": {"parameters": [{"$ref": "#/components/parameters/Missing"}]}}},
        }

        with pytest.raises(SpecConfigurationError, match="Unresolvable reference"):
            load_operations(load_openapi_document(document))

    def test_remote_reference(self) -> None:
        """Test references outside the document are rejected"""
        document = {
            "openapi": "3.0.0",
            "info": {"title": "API", "version": "1"},
            "paths": {"/users": {"get": {"parameters": [{"$ref": "common.yaml#/Limit"}]}}},
        }

        with pytest.raises(SpecConfigurationError, match="Only local references"):
            load_operations(load_openapi_document(document))
