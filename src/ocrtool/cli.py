"""ocrtool-mcp CLI entrypoint."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console

from ocrtool import __version__

# stdout belongs to the JSON-RPC stream; everything human-facing goes to stderr.
console = Console(stderr=True)

USAGE = """\
This server implements the Model Context Protocol (2025-11-25) over stdio.
It exposes an 'ocr_text' tool for extracting text from images.

Usage:
  ocrtool-mcp                    Start the MCP server (reads JSON-RPC from stdin)
  ocrtool-mcp --config FILE      Start with settings loaded from a YAML file
  ocrtool-mcp --help             Show this help message

Options:
  -c, --config FILE      YAML settings file
  --log-level LEVEL      Diagnostic log level (DEBUG, INFO, WARNING, ERROR)
  --telemetry            Export OpenTelemetry spans (requires the otel extra)
  --version              Show the version and exit

The server communicates via JSON-RPC 2.0 over stdin/stdout.
Configure it in your MCP client as a stdio server.

Tool: ocr_text
  Arguments:
    image_path  - Local file path to an image
    url         - URL to download an image from
    base64      - Base64-encoded image data
    lang        - OCR languages (e.g. "en-US+zh-Hans")"""


def print_usage() -> None:
    """Print the usage text to stderr."""
    console.print("[bold]ocrtool-mcp[/bold] - MCP Server for OCR text extraction\n")
    console.print(USAGE, markup=False, highlight=False)


@click.command(context_settings={"help_option_names": []})
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False), default=None)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override the configured log level.",
)
@click.option("--telemetry", is_flag=True, help="Enable telemetry.")
@click.option("--help", "-h", "show_help", is_flag=True, help="Show usage on stderr and exit.")
@click.version_option(version=__version__, prog_name="ocrtool-mcp")
def main(
    config_path: str | None,
    log_level: str | None,
    telemetry: bool,
    show_help: bool,
) -> None:
    """Run the OCR MCP server on stdin/stdout until input ends."""
    if show_help:
        print_usage()
        return

    from ocrtool.config import ConfigError, ServerSettings, SettingsLoader
    from ocrtool.transport import build_server
    from ocrtool.utils.diagnostics import configure_logging

    if config_path is not None:
        try:
            settings = SettingsLoader(Path(config_path)).load()
        except ConfigError as exc:
            console.print(f"[red]Configuration error:[/red] {exc}", highlight=False)
            sys.exit(1)
    else:
        settings = ServerSettings()

    configure_logging(log_level or settings.log_level)

    if telemetry or settings.telemetry.enabled:
        from ocrtool.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(
                service_name=settings.server_name,
                export_to_console=settings.telemetry.otlp_endpoint is None,
                otlp_endpoint=settings.telemetry.otlp_endpoint,
            )
        except ImportError as exc:
            console.print(f"[red]Telemetry error:[/red] {exc}", highlight=False)
            sys.exit(1)

    build_server(settings).serve()


if __name__ == "__main__":
    main()
