#!/usr/bin/env python3
"""
Tool Registry - Name to tool mapping used by the dispatch layer

Built once from an explicit list of tools:
- Duplicate names fail at construction, not per request
- Each tool is validated (name, description, async execute, schema)
- Calls are checked against the tool schema before the handler runs
"""
import inspect
import logging
from typing import Any, Dict, Iterable, List

from base_tool import BaseTool, DispatchError, ToolResult, UpstreamError, ValidationError, validate_arguments


class ToolRegistry:
    """
    Immutable registry of tools keyed by name.

    execute_tool() is the single entry point for tool invocation: it resolves
    the tool, validates arguments and invokes the handler at most once.
    """

    def __init__(self, tools: Iterable[BaseTool]):
        self.loaded_tools: Dict[str, BaseTool] = {}

        for tool in tools:
            self._validate_tool(tool)

            if tool.name in self.loaded_tools:
                raise ValueError(f"Duplicate tool name: {tool.name}")

            self.loaded_tools[tool.name] = tool
            logging.info(f"  ✓ Registered tool: {tool.name}")

        logging.info(f"✅ Registered {len(self.loaded_tools)} tools")

    def _validate_tool(self, tool: BaseTool) -> None:
        """Validate that a tool is properly configured"""
        if not tool.name:
            raise ValueError(f"Tool {tool.__class__.__name__} missing name attribute")

        if not tool.description:
            raise ValueError(f"Tool {tool.name} missing description attribute")

        if not inspect.iscoroutinefunction(tool.execute):
            raise ValueError(f"Tool {tool.name} execute method must be async")

        try:
            schema = tool.input_schema
        except Exception as e:
            raise ValueError(f"Tool {tool.name} schema generation failed: {e}") from e

        if not isinstance(schema, dict):
            raise ValueError(f"Tool {tool.name} schema must be a dictionary")

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self.loaded_tools

    def __len__(self) -> int:
        return len(self.loaded_tools)

    def list_tools(self) -> List[Dict[str, Any]]:
        """Tool descriptors for an MCP tools/list response"""
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "inputSchema": tool.input_schema,
            }
            for tool in self.loaded_tools.values()
        ]

    async def execute_tool(self, tool_name: str, arguments: Any) -> Dict[str, Any]:
        """
        Execute a tool by name with given arguments.

        Returns the MCP result dict. Handler-level failures (ValidationError,
        UpstreamError) come back as an error result; DispatchError is raised.
        """
        tool = self.loaded_tools.get(tool_name)
        if tool is None:
            raise DispatchError(f"Tool not found: {tool_name}", code=-32601)

        validated = validate_arguments(tool_name, tool.input_schema, arguments)

        logging.info(f"⚡ Executing tool: {tool_name}")
        try:
            result = await tool.execute(**validated)
        except (ValidationError, UpstreamError) as e:
            logging.warning(f"❌ Tool {tool_name} failed: {e.message}")
            return ToolResult.error(e.message).to_dict()

        if not isinstance(result, ToolResult):
            raise TypeError(f"Tool {tool_name} returned invalid result type: {type(result).__name__}")

        return result.to_dict()
