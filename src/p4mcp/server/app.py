"""Server assembly — wires config, backend, registry and dispatcher together."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, IO

from p4mcp.p4.backend import create_backend
from p4mcp.protocol.dispatcher import MessageDispatcher
from p4mcp.protocol.registry import default_registry
from p4mcp.server.pump import StdioServer

if TYPE_CHECKING:
    from p4mcp.config import ServerConfig
    from p4mcp.p4.backend import P4Backend

logger = logging.getLogger(__name__)


def create_dispatcher(config: ServerConfig, backend: P4Backend | None = None) -> MessageDispatcher:
    """Build a dispatcher; the backend is chosen from *config* unless given."""
    return MessageDispatcher(
        registry=default_registry(),
        backend=backend if backend is not None else create_backend(config),
        config=config,
    )


async def run_stdio(
    config: ServerConfig,
    *,
    reader: IO[bytes] | None = None,
    writer: IO[bytes] | None = None,
) -> StdioServer:
    """Serve one client until end of input and return the finished server."""
    logger.info("Starting %s %s", config.server_name, config.server_version)
    server = StdioServer(create_dispatcher(config), reader=reader, writer=writer)
    await server.serve()
    logger.info("%s shutting down", config.server_name)
    return server
