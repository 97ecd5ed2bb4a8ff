"""P4Backend protocol — the common interface for command execution strategies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from p4mcp.config import ServerConfig
    from p4mcp.p4.commands import P4Command

logger = logging.getLogger(__name__)


@runtime_checkable
class P4Backend(Protocol):
    """Executes a :data:`~p4mcp.p4.commands.P4Command` and returns its text output.

    Implementations raise :class:`~p4mcp.p4.errors.ExecutionError` (or a
    subclass) on failure; they never return partial output for a failed
    command.
    """

    async def execute(self, command: P4Command) -> str:
        """Run *command* and return its standard output as text."""
        ...


def create_backend(config: ServerConfig) -> P4Backend:
    """Pick the backend for *config*.

    Called once while assembling the server; the choice holds for the
    lifetime of the process.
    """
    from p4mcp.p4.mock_backend import MockBackend
    from p4mcp.p4.subprocess_backend import SubprocessBackend

    if config.mock_mode:
        logger.info("Using mock p4 backend")
        return MockBackend()
    logger.info("Using p4 binary %r", config.p4_binary)
    return SubprocessBackend(
        program=config.p4_binary,
        timeout=config.timeout,
        env=config.env,
        cwd=config.cwd,
    )
