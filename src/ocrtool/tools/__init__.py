"""Tool layer — descriptors, the ``ocr_text`` tool, and the registry."""

from ocrtool.tools.models import CallToolResult, TextContent, ToolDescriptor
from ocrtool.tools.ocr_text import OCR_TEXT_TOOL, OcrTextTool
from ocrtool.tools.registry import Tool, ToolRegistry

__all__ = [
    "OCR_TEXT_TOOL",
    "CallToolResult",
    "OcrTextTool",
    "TextContent",
    "Tool",
    "ToolDescriptor",
    "ToolRegistry",
]
