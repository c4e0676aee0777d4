"""Request and invocation result models"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .api_spec import HTTPMethod


class BuiltRequest(BaseModel):
    """Fully resolved HTTP request, one per invocation"""

    method: HTTPMethod
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: str | None = None
    content_type: str | None = None

    # Signing context handed to the authentication handler
    query_params: list[tuple[str, str]] = Field(default_factory=list)
    body_params: dict[str, Any] = Field(default_factory=dict)


class ToolResult(BaseModel):
    """Outcome of one tool invocation"""

    model_config = ConfigDict(populate_by_name=True)

    content: str
    is_error: bool = Field(default=False, alias="isError")

    def to_dict(self) -> dict[str, Any]:
        """Wire form: ``{"content": ...}`` or ``{"isError": true, "content": ...}``"""
        if self.is_error:
            return {"isError": True, "content": self.content}
        return {"content": self.content}
