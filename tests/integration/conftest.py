"""Shared fixtures for end-to-end tests against an in-process Users API"""

import json
import re

import httpx
import pytest

from openapi_mcp.config import get_settings
from openapi_mcp.services import HTTPClient

BASE_URL = "https://users.example.com/api"

USERS_SPEC = {
    "openapi": "3.0.3",
    "info": {"title": "Users API", "version": "1.0.0"},
    "servers": [{"url": BASE_URL}],
    "paths": {
        "/users": {
            "get": {
                "operationId": "listUsers",
                "summary": "List users",
                "parameters": [{"name": "limit", "in": "query", "schema": {"type": "integer"}}],
            },
            "post": {"operationId": "createUser", "summary": "Create a user"},
        },
        "/users/{id}": {
            "parameters": [{"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}}],
            "get": {"operationId": "getUser", "summary": "Get a user"},
            "delete": {"operationId": "deleteUser", "summary": "Delete a user"},
        },
    },
}


class FakeUsersAPI:
    """Minimal in-memory Users API served through httpx.MockTransport"""

    def __init__(self) -> None:
        self.users = {1: {"id": 1, "name": "Alice"}}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")

        if path == "/users" and request.method == "GET":
            limit = int(request.url.params.get("limit", len(self.users)))
            return httpx.Response(200, json=list(self.users.values())[:limit])

        if path == "/users" and request.method == "POST":
            payload = json.loads(request.content)
            user = {"id": max(self.users) + 1, **payload}
            self.users[user["id"]] = user
            return httpx.Response(201, json=user)

        match = re.fullmatch(r"/users/(\d+)", path)
        if match is None:
            return httpx.Response(404)

        user_id = int(match.group(1))
        if user_id not in self.users:
            return httpx.Response(404, json={"error": "not found"})

        if request.method == "DELETE":
            del self.users[user_id]
            return httpx.Response(204)

        return httpx.Response(200, json=self.users[user_id])


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reload settings for every test"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def users_api() -> FakeUsersAPI:
    return FakeUsersAPI()


@pytest.fixture
def http_client(users_api: FakeUsersAPI) -> HTTPClient:
    """HTTP client wired to the fake API"""
    return HTTPClient(transport=httpx.MockTransport(users_api))
