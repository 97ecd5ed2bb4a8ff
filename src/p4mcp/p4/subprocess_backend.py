"""SubprocessBackend — runs the real ``p4`` binary.

Follows the same ``asyncio.create_subprocess_exec`` pattern as the rest of
the codebase: no shell, stdout and stderr captured, optional timeout that
kills the child.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import TYPE_CHECKING

from p4mcp.p4.commands import DEFAULT_PROGRAM
from p4mcp.p4.errors import ExecutionTimeoutError, SpawnFailedError, ToolFailedError

if TYPE_CHECKING:
    from p4mcp.p4.commands import P4Command

logger = logging.getLogger(__name__)


class SubprocessBackend:
    """Executes commands with the external Perforce CLI.

    Satisfies the :class:`~p4mcp.p4.backend.P4Backend` protocol.

    * exit status 0 returns decoded stdout;
    * non-zero exit raises :class:`ToolFailedError` carrying stderr;
    * a spawn failure raises :class:`SpawnFailedError`;
    * exceeding *timeout* kills the process and raises
      :class:`ExecutionTimeoutError`.
    """

    def __init__(
        self,
        program: str = DEFAULT_PROGRAM,
        *,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
        cwd: str | None = None,
    ) -> None:
        self._program = program
        self._timeout = timeout
        self._env = env or {}
        self._cwd = cwd

    @property
    def program(self) -> str:
        return self._program

    async def execute(self, command: P4Command) -> str:
        """Run *command* through the ``p4`` binary."""
        invocation = command.to_invocation(self._program)
        logger.debug("Executing %s", invocation.argv)

        env = {**os.environ, **self._env} if self._env else None

        try:
            proc = await asyncio.create_subprocess_exec(
                *invocation.argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
                cwd=self._cwd,
            )
        except OSError as exc:
            raise SpawnFailedError(self._program, str(exc)) from exc

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except TimeoutError:
            proc.kill()
            await proc.wait()
            raise ExecutionTimeoutError(self._timeout or 0.0) from None

        if proc.returncode != 0:
            detail = stderr.decode(errors="replace") if stderr else ""
            logger.debug("p4 exited with %s: %s", proc.returncode, detail.strip())
            raise ToolFailedError(proc.returncode or 1, detail)

        return stdout.decode(errors="replace") if stdout else ""
