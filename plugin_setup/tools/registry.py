"""Tool registry for the setup A2A server.

Manages registration and discovery of setup tools, and is the boundary at
which tool results are normalized and stray exceptions become error results.
"""

import json
import logging
import re
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass
class ToolDefinition:
    """A2A tool definition."""

    name: str
    description: str
    input_schema: dict[str, Any]
    handler: Callable[..., Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


def text_result(text: str, is_error: bool = False) -> dict[str, Any]:
    """Build a single-text-block tool result."""
    return {"content": [{"type": "text", "text": text}], "isError": is_error}


class ToolRegistry:
    """
    Registry for setup tools.

    Manages tool registration and provides tool discovery and invocation.
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, tool: ToolDefinition) -> None:
        """Register a tool."""
        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    def register_all(self, tools: list[ToolDefinition]) -> None:
        for tool in tools:
            self.register(tool)

    def get(self, name: str) -> ToolDefinition | None:
        """Get a tool by name."""
        return self._tools.get(name)

    def get_all_tools(self) -> list[ToolDefinition]:
        """Get all registered tools."""
        return list(self._tools.values())

    def list_names(self) -> list[str]:
        """List all tool names."""
        return list(self._tools.keys())

    def bind(self, name: str) -> Callable[..., Awaitable[dict[str, Any]]]:
        """Return a keyword-argument handler that invokes ``name`` through call_tool."""

        async def handler(**arguments: Any) -> dict[str, Any]:
            return await self.call_tool(name, arguments)

        return handler

    def export_tools(self) -> list[ToolDefinition]:
        """
        Tool definitions for handing to a host.

        Handlers are bound to call_tool, so a host calling them directly gets
        the same argument handling and error results as a registry call.
        """
        return [
            ToolDefinition(
                name=tool.name,
                description=tool.description,
                input_schema=tool.input_schema,
                handler=self.bind(tool.name),
            )
            for tool in self._tools.values()
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Invoke a tool by name.

        Args:
            name: Registered tool name
            arguments: Tool arguments, passed as keyword arguments. camelCase
                names (``sessionId``) are accepted for snake_case parameters.

        Returns:
            Tool result in ``{"content": [...], "isError": bool}`` form
        """
        tool = self._tools.get(name)
        if tool is None:
            logger.warning(f"[Setup] tools/call FAILED - Unknown tool: {name}")
            return text_result(f"Unknown tool: {name}", is_error=True)

        start_time = time.time()
        logger.info(f"[Setup] tools/call START - tool={name}")

        try:
            result = await tool.handler(**_normalize_arguments(arguments))
        except Exception as e:
            elapsed_ms = (time.time() - start_time) * 1000
            logger.error(
                f"[Setup] tools/call EXCEPTION - tool={name} elapsed={elapsed_ms:.1f}ms error={e}",
                exc_info=True,
            )
            return text_result(f"Error: {e}", is_error=True)

        response = self._normalize(result)
        elapsed_ms = (time.time() - start_time) * 1000
        status = "ERROR" if response.get("isError") else "OK"
        logger.info(f"[Setup] tools/call END - tool={name} status={status} elapsed={elapsed_ms:.1f}ms")
        return response

    @staticmethod
    def _normalize(result: Any) -> dict[str, Any]:
        if isinstance(result, str):
            return text_result(result)
        if isinstance(result, dict):
            if "content" in result:
                return result
            return text_result(json.dumps(result))
        return text_result(str(result))


def _normalize_arguments(arguments: dict[str, Any] | None) -> dict[str, Any]:
    """Map camelCase argument names to snake_case. Snake_case wins on conflict."""
    normalized: dict[str, Any] = {}
    for name, value in (arguments or {}).items():
        snake = _CAMEL_BOUNDARY.sub("_", name).lower()
        if snake != name and snake in arguments:
            continue
        normalized[snake] = value
    return normalized
