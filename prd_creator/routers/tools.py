"""Tool listing + invocation endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Request

from prd_creator.schemas.tool import ToolInfo, ToolResult
from prd_creator.tools import ToolContext, call_tool, list_tools

router = APIRouter()


def _context(request: Request) -> ToolContext:
    return ToolContext(database=request.app.state.db, settings=request.app.state.settings)


@router.get("/", response_model=list[ToolInfo])
async def get_tools():
    return list_tools()


@router.post("/{name}", response_model=ToolResult)
async def invoke_tool(name: str, request: Request, arguments: dict[str, Any] | None = Body(default=None)):
    """Run a tool; failures come back as ``isError`` results, not HTTP errors."""
    return await call_tool(_context(request), name, arguments)
