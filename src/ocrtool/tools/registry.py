"""ToolRegistry — holds the exposed tools and validates ``tools/call`` params."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ocrtool.protocol.errors import InvalidParamsError

if TYPE_CHECKING:
    from ocrtool.protocol.values import JsonValue
    from ocrtool.tools.models import CallToolResult, ToolDescriptor


@runtime_checkable
class Tool(Protocol):
    """A named capability invoked through ``tools/call``."""

    @property
    def descriptor(self) -> ToolDescriptor: ...

    def call(self, arguments: JsonValue | None) -> CallToolResult:
        """Run the tool; failures are reported inside the result, never raised."""
        ...


class ToolRegistry:
    """Name-to-tool map backing ``tools/list`` and ``tools/call``.

    Usage::

        registry = ToolRegistry([OcrTextTool(resolver, recognizer)])
        registry.list_tools()               # {"tools": [...]}
        registry.call(params)               # CallToolResult
    """

    def __init__(self, tools: list[Tool] | None = None) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        name = tool.descriptor.name
        if name in self._tools:
            msg = f"Tool already registered: {name}"
            raise ValueError(msg)
        self._tools[name] = tool

    def names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> dict[str, Any]:
        """Return the ``tools/list`` result payload."""
        return {"tools": [tool.descriptor.to_wire() for tool in self._tools.values()]}

    def call(self, params: JsonValue | None) -> CallToolResult:
        """Validate the call envelope and run the named tool.

        Raises:
            InvalidParamsError: If params are not an object, ``name`` is
                missing or not a string, or no such tool is registered.
        """
        if params is None or params.as_object() is None:
            raise InvalidParamsError("Missing params")

        name_value = params.get("name")
        name = name_value.as_str() if name_value is not None else None
        if name is None:
            raise InvalidParamsError("Missing 'name' in params")

        tool = self._tools.get(name)
        if tool is None:
            raise InvalidParamsError(f"Unknown tool: {name}")

        return tool.call(params.get("arguments"))
