"""
Tool Registry

Every tool exposed over JSON-RPC: name, display title, description, JSON
input schema and an async handler returning text.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from tradetools.services.base import ServiceError

logger = logging.getLogger(__name__)

ToolHandler = Callable[[dict], Awaitable[str]]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    title: str
    description: str
    input_schema: dict
    handler: ToolHandler

    def describe(self) -> dict:
        """Entry for a tools/list response."""
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


def text_result(text: str, is_error: bool = False) -> dict:
    result: dict = {"content": [{"type": "text", "text": text}]}
    if is_error:
        result["isError"] = True
    return result


class ToolRegistry:
    """Name-indexed tool collection."""

    def __init__(self, tools: Optional[list[ToolDefinition]] = None):
        self._tools: dict[str, ToolDefinition] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: ToolDefinition) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[dict]:
        return [tool.describe() for tool in self._tools.values()]

    def __len__(self) -> int:
        return len(self._tools)

    async def call(self, tool: ToolDefinition, args: Optional[dict]) -> dict:
        """
        Run a tool handler.

        Service errors (bad arguments, upstream failures) become tool results
        flagged with isError so the agent can read and correct them. Anything
        else propagates to the gateway.
        """
        logger.info({"message": "Tool call", "tool": tool.name, "arguments": args or {}})
        try:
            text = await tool.handler(args or {})
        except ServiceError as e:
            logger.warning(f"Tool {tool.name} failed: {e}")
            return text_result(str(e), is_error=True)
        return text_result(text)
