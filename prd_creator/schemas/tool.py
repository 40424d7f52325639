"""Tool-call envelope schemas."""

from typing import Any, Literal

from prd_creator.schemas.base import CamelModel


class TextContent(CamelModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(CamelModel):
    content: list[TextContent]
    is_error: bool = False

    @classmethod
    def text(cls, text: str, *, is_error: bool = False) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=is_error)


class ToolInfo(CamelModel):
    name: str
    description: str
    input_schema: dict[str, Any]
