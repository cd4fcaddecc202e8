"""Tests for ToolRegistry."""

from __future__ import annotations

from typing import Any

import pytest

from ocrtool.protocol.errors import InvalidParamsError
from ocrtool.protocol.values import json_value
from ocrtool.tools.models import CallToolResult
from ocrtool.tools.ocr_text import OcrTextTool
from ocrtool.tools.registry import Tool, ToolRegistry


class TestToolRegistry:
    def test_ocr_tool_satisfies_protocol(self, resolver: Any, recognizer: Any) -> None:
        assert isinstance(OcrTextTool(resolver, recognizer), Tool)

    def test_list_tools_is_stable(self, registry: ToolRegistry) -> None:
        first = registry.list_tools()
        assert first == registry.list_tools()
        assert len(first["tools"]) == 1
        assert first["tools"][0]["name"] == "ocr_text"

    def test_names(self, registry: ToolRegistry) -> None:
        assert registry.names() == ["ocr_text"]

    def test_duplicate_registration_rejected(
        self, registry: ToolRegistry, resolver: Any, recognizer: Any
    ) -> None:
        with pytest.raises(ValueError, match="already registered"):
            registry.register(OcrTextTool(resolver, recognizer))

    def test_call_dispatches_to_tool(self, registry: ToolRegistry) -> None:
        result = registry.call(
            json_value({"name": "ocr_text", "arguments": {"url": "https://x/y.png"}})
        )
        assert isinstance(result, CallToolResult)
        assert result.joined_text == "Hello\nWorld"

    def test_missing_arguments_is_tool_level_error(self, registry: ToolRegistry) -> None:
        result = registry.call(json_value({"name": "ocr_text"}))
        assert result.is_error
        assert "No image source provided" in result.joined_text

    @pytest.mark.parametrize(
        ("params", "match"),
        [
            (None, "Missing params"),
            ("ocr_text", "Missing params"),
            ({"arguments": {}}, "Missing 'name'"),
            ({"name": None}, "Missing 'name'"),
            ({"name": "ocr"}, "Unknown tool: ocr"),
        ],
    )
    def test_structural_errors(self, registry: ToolRegistry, params: Any, match: str) -> None:
        with pytest.raises(InvalidParamsError, match=match):
            registry.call(json_value(params) if params is not None else None)
