"""Error types for the Perforce execution layer."""

from __future__ import annotations


class ExecutionError(Exception):
    """Base error for all failures while executing a Perforce command."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("p4 execution failed" + (f": {detail}" if detail else ""))


class SpawnFailedError(ExecutionError):
    """The ``p4`` binary could not be started (missing, not executable, ...)."""

    def __init__(self, binary: str, detail: str = "") -> None:
        self.binary = binary
        super().__init__(f"cannot run {binary}" + (f" ({detail})" if detail else ""))


class ToolFailedError(ExecutionError):
    """``p4`` ran but exited with a non-zero status."""

    def __init__(self, exit_code: int, stderr: str = "") -> None:
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(stderr.strip() or f"p4 exited with status {exit_code}")


class ExecutionTimeoutError(ExecutionError):
    """``p4`` did not finish within the configured timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"timed out after {timeout}s")
