"""``p4mcp serve`` — run the MCP server over stdin/stdout."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import click
from rich.markup import escape

from p4mcp.cli_commands._options import config_options, resolve_config
from p4mcp.cli_commands._output import configure_logging, err_console

if TYPE_CHECKING:
    from pathlib import Path


@click.command()
@click.option("--debug", "-d", is_flag=True, help="Enable debug logging (stderr).")
@click.option("--telemetry", is_flag=True, help="Export OpenTelemetry spans to stderr.")
@click.option(
    "--otlp-endpoint",
    default=None,
    metavar="URL",
    help="Also export spans via OTLP/gRPC to URL (implies --telemetry).",
)
@config_options
def serve(
    debug: bool,
    telemetry: bool,
    otlp_endpoint: str | None,
    config_path: Path | None,
    mock: bool | None,
    p4_binary: str | None,
    timeout: float | None,
) -> None:
    """Serve Perforce tools to one MCP client on stdin/stdout."""
    from p4mcp.server.app import run_stdio

    configure_logging(debug=debug)
    config = resolve_config(config_path, mock, p4_binary, timeout)

    if telemetry or otlp_endpoint:
        from p4mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(
                service_name=config.server_name,
                export_to_console=telemetry,
                otlp_endpoint=otlp_endpoint,
            )
        except ImportError as exc:
            err_console.print(f"[red]Telemetry error:[/red] {escape(str(exc))}")
            raise SystemExit(1) from exc

    try:
        asyncio.run(run_stdio(config))
    except KeyboardInterrupt:
        err_console.print("[yellow]Interrupted.[/yellow]")
