"""Shared CLI output helpers.

``serve`` owns stdout for protocol frames, so diagnostics always go through
``err_console``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

if TYPE_CHECKING:
    from p4mcp.protocol.models import ToolDescriptor

console = Console()
err_console = Console(stderr=True)


def configure_logging(*, debug: bool = False) -> None:
    """Send all log records to stderr, INFO by default and DEBUG with *debug*."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=debug, rich_tracebacks=True)],
        force=True,
    )


def print_tools_table(tools: list[ToolDescriptor]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Perforce Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Parameters")

    for tool in tools:
        table.add_row(tool.name, _truncate(tool.description), _format_params(tool.input_schema))

    console.print(table)


def _format_params(schema: dict[str, Any]) -> str:
    properties = schema.get("properties")
    if not isinstance(properties, dict) or not properties:
        return "-"
    required = schema.get("required")
    required_names = set(required) if isinstance(required, list) else set()
    return ", ".join(name if name in required_names else f"{name}?" for name in properties)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
