"""Tool dispatch: name -> validator -> handler -> response envelope.

All error enveloping happens here. Handlers return a plain result or raise;
the dispatcher never lets an exception escape a tool call.
"""

import json
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from mcp.types import CallToolResult, TextContent, Tool

from workspace_docs_mcp.errors import ToolArgumentError
from workspace_docs_mcp.server.context import ToolContext

logger = logging.getLogger(__name__)

Validator = Callable[[Any], Any]
Handler = Callable[[ToolContext, Any], Awaitable["dict[str, Any] | str"]]


@dataclass(frozen=True)
class ToolSpec:
    """Everything needed to list and run one tool.

    Attributes:
        name: Tool name exposed to MCP clients.
        description: Human-readable description.
        input_schema: JSON schema of the arguments.
        validator: Parses raw arguments into the tool's request model.
        handler: Coroutine run with the context and the parsed request.
        action: Gerund phrase used in failure messages ("Error <action>: ...").
    """

    name: str
    description: str
    input_schema: dict[str, Any]
    validator: Validator
    handler: Handler
    action: str

    def to_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema)


def _envelope(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


def _render(result: "dict[str, Any] | str") -> str:
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2)


class ToolDispatcher:
    """Registry of tool specs with a single enveloping entry point."""

    def __init__(self, specs: Iterable[ToolSpec]) -> None:
        self._specs: dict[str, ToolSpec] = {}
        for spec in specs:
            if spec.name in self._specs:
                raise ValueError(f"Duplicate tool name: {spec.name}")
            self._specs[spec.name] = spec

    def __len__(self) -> int:
        return len(self._specs)

    def list_tools(self) -> list[Tool]:
        return [spec.to_tool() for spec in self._specs.values()]

    async def call(self, name: str, arguments: Any, ctx: ToolContext) -> CallToolResult:
        """Run a tool and wrap its outcome in exactly one text envelope.

        Args:
            name: Requested tool name.
            arguments: Raw arguments as received (may be None).
            ctx: Shared tool context.

        Returns:
            CallToolResult with isError set for unknown tools, invalid
            arguments and handler failures.
        """
        spec = self._specs.get(name)
        if spec is None:
            logger.warning("Unknown tool requested: %s", name)
            return _envelope(f"Error: Unknown tool: {name}", is_error=True)

        try:
            request = spec.validator(arguments)
        except ToolArgumentError as e:
            logger.warning("Invalid arguments for %s: %s", name, e)
            return _envelope(f"Error: {e}", is_error=True)
        except Exception as e:
            logger.exception(f"Error validating arguments for {name}")
            return _envelope(f"Error: {e}", is_error=True)

        logger.debug("Calling tool %s", name)
        try:
            result = await spec.handler(ctx, request)
        except Exception as e:
            logger.exception(f"Error calling tool {name}")
            return _envelope(f"Error {spec.action}: {e}", is_error=True)

        return _envelope(_render(result))
