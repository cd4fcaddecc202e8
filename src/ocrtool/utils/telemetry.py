"""Tracing for the ocrtool request path.

Two spans cover a ``tools/call``: ``ocrtool.dispatch`` wraps every request
routed by :class:`~ocrtool.protocol.dispatcher.RequestDispatcher`, and
``ocrtool.tool.call`` wraps source resolution plus recognition inside it.
Both come from :func:`get_tracer` and stay no-ops until
:func:`configure_telemetry` installs an SDK provider (the ``otel`` extra).

Finished spans are never written to stdout, which carries JSON-RPC only.
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

# Request envelope (ocrtool.dispatch)
ATTR_RPC_METHOD = "ocrtool.rpc.method"
ATTR_RPC_ID = "ocrtool.rpc.id"
ATTR_RPC_ERROR_CODE = "ocrtool.rpc.error_code"

# ocr_text invocation (ocrtool.tool.call)
ATTR_TOOL_NAME = "ocrtool.tool.name"
ATTR_TOOL_SOURCE = "ocrtool.tool.source"
ATTR_TOOL_IS_ERROR = "ocrtool.tool.is_error"
ATTR_OCR_LANGUAGES = "ocrtool.ocr.languages"
ATTR_OCR_REGIONS = "ocrtool.ocr.regions"

_INSTRUMENTATION_NAME = "ocrtool"
_EXTRA = "ocrtool-mcp[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Tracer for *name*, defaulting to the ``ocrtool`` instrumentation scope."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "ocrtool-mcp",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider for the ``ocrtool.*`` spans.

    With *export_to_console* each span is printed to stderr as it ends.
    With *otlp_endpoint* spans are batched to an OTLP/gRPC collector. Both
    exporters may be active together.

    Raises:
        ImportError: If ``opentelemetry-sdk`` is missing, or
            ``opentelemetry-exporter-otlp`` is missing while an endpoint is set.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        raise ImportError(_install_hint("opentelemetry-sdk", "configure_telemetry()")) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    for processor in _span_processors(export_to_console, otlp_endpoint):
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def _span_processors(export_to_console: bool, otlp_endpoint: str | None) -> list[Any]:
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    processors: list[Any] = []
    if export_to_console:
        processors.append(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            raise ImportError(_install_hint("opentelemetry-exporter-otlp", "OTLP export")) from exc
        processors.append(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    return processors


def _install_hint(package: str, feature: str) -> str:
    return f"{package} is required for {feature}. Install it with: pip install {_EXTRA}"
