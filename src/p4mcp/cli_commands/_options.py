"""Options shared by the commands that build a server configuration."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from p4mcp.config import ConfigError, ServerConfig, load_config

if TYPE_CHECKING:
    from collections.abc import Callable

_CONFIG_OPTIONS = (
    click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="YAML configuration file.",
    ),
    click.option(
        "--mock/--real",
        "mock",
        default=None,
        help="Serve canned output instead of running p4 (default: $P4_MOCK_MODE).",
    ),
    click.option("--p4-binary", default=None, help="Perforce CLI executable."),
    click.option(
        "--timeout",
        type=click.FloatRange(min=0, min_open=True),
        default=None,
        help="Per-command timeout in seconds.",
    ),
)


def config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach ``--config``, ``--mock/--real``, ``--p4-binary`` and ``--timeout``."""
    for option in reversed(_CONFIG_OPTIONS):
        func = option(func)
    return func


def resolve_config(
    config_path: Path | None,
    mock: bool | None,
    p4_binary: str | None,
    timeout: float | None,
) -> ServerConfig:
    """Layer CLI flags over the config file (or environment).

    Raises:
        click.ClickException: If the configuration is invalid.
    """
    try:
        config = load_config(config_path) if config_path is not None else ServerConfig.from_env()
    except ConfigError as exc:
        raise click.ClickException(f"Configuration error: {exc}") from exc

    overrides: dict[str, Any] = {}
    if mock is not None:
        overrides["mock_mode"] = mock
    if p4_binary is not None:
        overrides["p4_binary"] = p4_binary
    if timeout is not None:
        overrides["timeout"] = timeout
    return config.model_copy(update=overrides) if overrides else config
