"""Server configuration — backend selection and subprocess settings.

The configuration is assembled once at startup (environment, optional YAML
file, CLI flags) and injected into the components that need it.  Nothing
else in the package reads the environment.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from p4mcp import __version__

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

MOCK_MODE_ENV = "P4_MOCK_MODE"
P4_BINARY_ENV = "P4MCP_P4_BINARY"
TIMEOUT_ENV = "P4MCP_TIMEOUT"

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "p4-mcp"

_FALSE_VALUES = frozenset({"", "0", "false", "no", "off"})


class ConfigError(Exception):
    """Raised when a configuration file fails parsing or validation."""


class ServerConfig(BaseModel):
    """Configuration for one server process."""

    mock_mode: bool = Field(default=False, description="Serve canned output instead of running p4.")
    p4_binary: str = Field(default="p4", description="Perforce CLI executable.")
    timeout: float | None = Field(
        default=None, gt=0, description="Per-command timeout in seconds (None waits forever)."
    )
    env: dict[str, str] = Field(default_factory=dict, description="Extra env vars for p4.")
    cwd: str | None = Field(default=None, description="Working directory for p4.")
    server_name: str = SERVER_NAME
    server_version: str = __version__
    protocol_version: str = PROTOCOL_VERSION

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Build a config from environment variables.

        ``P4_MOCK_MODE`` enables the mock backend when set to anything other
        than an explicit false value (``0``, ``false``, ``no``, ``off`` or
        empty).

        Raises:
            ConfigError: If a variable holds an invalid value.
        """
        try:
            return cls.model_validate(_env_overrides(os.environ if environ is None else environ))
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def load_config(path: Path, environ: Mapping[str, str] | None = None) -> ServerConfig:
    """Read a YAML config file layered over environment defaults.

    ``${VAR}`` and ``$VAR`` references are expanded with
    :func:`os.path.expandvars` before parsing.

    Raises:
        ConfigError: On read errors, YAML errors or schema validation failures.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    try:
        data: Any = yaml.safe_load(os.path.expandvars(raw))
    except yaml.YAMLError as exc:
        raise ConfigError(f"YAML parse error: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config YAML must be a mapping")

    merged = {**_env_overrides(os.environ if environ is None else environ), **data}
    try:
        return ServerConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    if MOCK_MODE_ENV in environ:
        values["mock_mode"] = environ[MOCK_MODE_ENV].strip().lower() not in _FALSE_VALUES
    if environ.get(P4_BINARY_ENV):
        values["p4_binary"] = environ[P4_BINARY_ENV]
    if environ.get(TIMEOUT_ENV):
        values["timeout"] = environ[TIMEOUT_ENV]
    return values
