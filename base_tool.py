#!/usr/bin/env python3
"""
Base Tool - Tool foundation with type-driven schema generation

Provides the abstract base class every MCP tool derives from, the standard
result container, argument validation against a generated JSON schema and the
error taxonomy shared by handlers and the dispatch layer.
"""
import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, Optional, Union, get_args, get_origin, get_type_hints


class ToolError(Exception):
    """Base exception for tool and dispatch errors"""

    def __init__(self, message: str, code: int = -32603):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(ToolError):
    """Malformed or missing filter input, raised before any network call"""

    def __init__(self, message: str):
        super().__init__(message, code=-32602)


class UpstreamError(ToolError):
    """Non-success status or malformed body from an external API"""

    def __init__(self, service: str, body: str, status: Optional[int] = None):
        self.service = service
        self.body = body
        self.status = status
        super().__init__(f"{service} error: {body}", code=-32603)


class DispatchError(ToolError):
    """Unknown tool name or arguments that do not match the tool schema"""


@dataclass
class ToolResult:
    """Standardized tool execution result"""

    content: list[Dict[str, Any]] = field(default_factory=list)
    is_error: bool = False

    def add_text(self, text: str) -> "ToolResult":
        """Add text content"""
        self.content.append({"type": "text", "text": text})
        return self

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls().add_text(text)

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(is_error=True).add_text(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to MCP response format"""
        result: Dict[str, Any] = {"content": self.content}
        if self.is_error:
            result["isError"] = True
        return result


class BaseTool(ABC):
    """
    Base class for MCP tools with automatic schema generation.

    Tools only need to:
    1. Implement execute() method with typed parameters
    2. Set name and description class attributes
    3. Document parameters in an ``Args:`` docstring section
    4. Return ToolResult
    """

    # Override these in subclasses
    name: str = ""
    description: str = ""

    @abstractmethod
    async def execute(self, **kwargs) -> ToolResult:
        """Execute the tool with typed parameters"""

    @property
    @lru_cache(maxsize=1)
    def input_schema(self) -> Dict[str, Any]:
        """Auto-generate JSON schema from execute() type hints"""
        return self._generate_schema()

    def _generate_schema(self) -> Dict[str, Any]:
        """Generate JSON schema from execute method signature"""
        sig = inspect.signature(self.execute)
        type_hints = get_type_hints(self.execute)

        properties = {}
        required = []

        for param_name, param in sig.parameters.items():
            if param_name == "self" or param.kind is inspect.Parameter.VAR_KEYWORD:
                continue

            param_type = type_hints.get(param_name, str)
            json_type = self._python_type_to_json_type(param_type)

            description = self._extract_param_description(param_name)
            if description:
                json_type["description"] = description

            properties[param_name] = json_type

            # Required if no default value
            if param.default is inspect.Parameter.empty:
                required.append(param_name)

        schema = {
            "type": "object",
            "properties": properties,
            "additionalProperties": False,
        }

        if required:
            schema["required"] = required

        return schema

    @staticmethod
    def _python_type_to_json_type(python_type: type) -> Dict[str, Any]:
        """Convert Python type hints to JSON schema types"""
        origin = get_origin(python_type)

        # Handle Optional/Union types
        if origin is Union:
            args = get_args(python_type)
            if len(args) == 2 and type(None) in args:
                # Optional[T] case
                non_none_type = next(arg for arg in args if arg is not type(None))
                base_schema = BaseTool._python_type_to_json_type(non_none_type)
                base_schema["nullable"] = True
                return base_schema

        # Handle basic types
        type_mapping = {
            str: {"type": "string"},
            int: {"type": "integer"},
            float: {"type": "number"},
            bool: {"type": "boolean"},
            list: {"type": "array"},
            dict: {"type": "object"},
        }

        base_type = origin or python_type
        return dict(type_mapping.get(base_type, {"type": "string"}))

    def _extract_param_description(self, param_name: str) -> str:
        """Extract a parameter description from the ``Args:`` section of execute()"""
        doc = inspect.getdoc(self.execute)
        if not doc:
            return ""

        in_args_section = False
        description_lines: list[str] = []
        collecting = False

        for line in doc.split("\n"):
            stripped = line.strip()

            if stripped == "Args:":
                in_args_section = True
                continue
            if not in_args_section:
                continue

            # A new unindented "Section:" header ends the Args block
            if stripped.endswith(":") and not line.startswith(" "):
                break

            head, sep, rest = stripped.partition(":")
            if sep and head and " " not in head:
                if collecting:
                    break
                if head == param_name:
                    collecting = True
                    if rest.strip():
                        description_lines.append(rest.strip())
                continue

            if collecting and stripped:
                description_lines.append(stripped)

        return " ".join(description_lines)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.name}>"


_JSON_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "array": lambda v: isinstance(v, list),
    "object": lambda v: isinstance(v, dict),
}


def validate_arguments(tool_name: str, schema: Dict[str, Any], arguments: Any) -> Dict[str, Any]:
    """
    Check call arguments against a tool's input schema.

    Returns the arguments with explicit nulls for nullable parameters dropped,
    so handlers fall back to their defaults. Raises DispatchError (-32602) on
    any mismatch; the handler is never invoked in that case.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise DispatchError(f"Invalid arguments for {tool_name}: expected an object", code=-32602)

    properties = schema.get("properties", {})

    for name in schema.get("required", []):
        if arguments.get(name) is None:
            raise DispatchError(f"Invalid arguments for {tool_name}: missing required argument '{name}'", code=-32602)

    validated = {}
    for name, value in arguments.items():
        prop = properties.get(name)
        if prop is None:
            raise DispatchError(f"Invalid arguments for {tool_name}: unexpected argument '{name}'", code=-32602)

        if value is None and prop.get("nullable"):
            continue

        expected = prop.get("type", "string")
        check = _JSON_TYPE_CHECKS.get(expected)
        if check is not None and not check(value):
            raise DispatchError(
                f"Invalid arguments for {tool_name}: '{name}' must be of type {expected}",
                code=-32602,
            )
        validated[name] = value

    return validated
