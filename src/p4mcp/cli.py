"""p4-mcp CLI entrypoint."""

from __future__ import annotations

import click

from p4mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="p4mcp")
def main() -> None:
    """p4-mcp — Perforce tools over the Model Context Protocol."""


# Register subcommands
from p4mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
