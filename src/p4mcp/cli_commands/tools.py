"""``p4mcp tools`` — inspect and invoke the Perforce tools offline."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import TYPE_CHECKING, Any

import click
from rich.markup import escape

from p4mcp.cli_commands._options import config_options, resolve_config
from p4mcp.cli_commands._output import err_console, print_tools_table

if TYPE_CHECKING:
    from pathlib import Path


@click.group()
def tools() -> None:
    """Inspect and invoke tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print descriptors as JSON.")
def list_tools(as_json: bool) -> None:
    """List the tools advertised by ``tools/list``."""
    from p4mcp.protocol.registry import default_registry

    descriptors = default_registry().all_tools()
    if as_json:
        payload = [d.model_dump(by_alias=True) for d in descriptors]
        click.echo(json.dumps(payload, indent=2))
        return
    print_tools_table(descriptors)


@tools.command("call")
@click.argument("name")
@click.option("--args", "raw_args", default="{}", help="Tool arguments as a JSON object.")
@config_options
def call_tool(
    name: str,
    raw_args: str,
    config_path: Path | None,
    mock: bool | None,
    p4_binary: str | None,
    timeout: float | None,
) -> None:
    """Run tool NAME once and print its text output."""
    from p4mcp.p4.errors import ExecutionError
    from p4mcp.protocol.errors import ProtocolError
    from p4mcp.server.app import create_dispatcher

    try:
        arguments: Any = json.loads(raw_args)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--args") from exc

    config = resolve_config(config_path, mock, p4_binary, timeout)
    dispatcher = create_dispatcher(config)

    try:
        result = asyncio.run(dispatcher.call_tool(name, arguments))
    except (ProtocolError, ExecutionError) as exc:
        err_console.print(f"[red]Tool error:[/red] {escape(str(exc))}")
        sys.exit(1)

    for block in result.content:
        if block.type == "text":
            click.echo(block.text)
