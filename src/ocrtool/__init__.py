"""ocrtool-mcp — an MCP stdio server exposing OCR text extraction as a tool."""

from __future__ import annotations

__version__ = "1.0.0"
