"""Per-tool argument decoders — turn a ``tools/call`` argument bag into a command.

Decoding is permissive: missing fields take their documented defaults and
values of the wrong type fall back to the default when they cannot be
coerced.  Missing *required* fields (``files``, ``description``) degrade
to an empty list / empty string rather than failing the call.  Only
inputs that cannot describe any command are rejected: a non-object
argument bag and a negative ``max``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from p4mcp.p4.commands import (
    DEFAULT_CHANGES_MAX,
    DEFAULT_SYNC_PATH,
    AddCommand,
    ChangesCommand,
    EditCommand,
    InfoCommand,
    OpenedCommand,
    RevertCommand,
    StatusCommand,
    SubmitCommand,
    SyncCommand,
)
from p4mcp.protocol.errors import ArgumentValidationError, UnknownToolError

if TYPE_CHECKING:
    from collections.abc import Callable

    from p4mcp.p4.commands import P4Command

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})


class ArgumentBag:
    """Typed accessors over an untyped ``arguments`` mapping."""

    def __init__(self, tool: str, arguments: Any) -> None:
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ArgumentValidationError(tool, "arguments must be an object")
        self.tool = tool
        self._values: dict[str, Any] = arguments

    def get_optional_str(self, key: str, *, allow_int: bool = False) -> str | None:
        value = self._values.get(key)
        if isinstance(value, str):
            return value
        if allow_int and isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        self._ignore(key, value)
        return None

    def get_str(self, key: str, default: str) -> str:
        value = self.get_optional_str(key)
        return default if value is None else value

    def get_bool(self, key: str, default: bool) -> bool:
        value = self._values.get(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        self._ignore(key, value)
        return default

    def get_int(self, key: str, default: int) -> int:
        value = self._values.get(key)
        if isinstance(value, bool):
            self._ignore(key, value)
            return default
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        self._ignore(key, value)
        return default

    def get_optional_str_list(self, key: str) -> list[str] | None:
        value = self._values.get(key)
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [item for item in value if isinstance(item, str)]
        self._ignore(key, value)
        return None

    def get_str_list(self, key: str) -> list[str]:
        return self.get_optional_str_list(key) or []

    def _ignore(self, key: str, value: Any) -> None:
        if value is not None:
            logger.debug("%s: ignoring %s=%r (unexpected type)", self.tool, key, value)


def _status(args: ArgumentBag) -> P4Command:
    return StatusCommand(path=args.get_optional_str("path"))


def _sync(args: ArgumentBag) -> P4Command:
    return SyncCommand(
        path=args.get_str("path", DEFAULT_SYNC_PATH),
        force=args.get_bool("force", False),
    )


def _edit(args: ArgumentBag) -> P4Command:
    return EditCommand(files=args.get_str_list("files"))


def _add(args: ArgumentBag) -> P4Command:
    return AddCommand(files=args.get_str_list("files"))


def _submit(args: ArgumentBag) -> P4Command:
    return SubmitCommand(
        description=args.get_str("description", ""),
        files=args.get_optional_str_list("files"),
    )


def _revert(args: ArgumentBag) -> P4Command:
    return RevertCommand(files=args.get_str_list("files"))


def _opened(args: ArgumentBag) -> P4Command:
    return OpenedCommand(changelist=args.get_optional_str("changelist", allow_int=True))


def _changes(args: ArgumentBag) -> P4Command:
    max_changes = args.get_int("max", DEFAULT_CHANGES_MAX)
    if max_changes < 0:
        raise ArgumentValidationError(args.tool, f"max must be >= 0, got {max_changes}")
    return ChangesCommand(max=max_changes, path=args.get_optional_str("path"))


def _info(_args: ArgumentBag) -> P4Command:
    return InfoCommand()


DECODERS: dict[str, Callable[[ArgumentBag], P4Command]] = {
    "p4_info": _info,
    "p4_status": _status,
    "p4_sync": _sync,
    "p4_edit": _edit,
    "p4_add": _add,
    "p4_submit": _submit,
    "p4_revert": _revert,
    "p4_opened": _opened,
    "p4_changes": _changes,
}


def decode_arguments(tool: str, arguments: Any) -> P4Command:
    """Build the command for *tool* from its raw argument bag.

    Raises:
        UnknownToolError: If no decoder exists for *tool*.
        ArgumentValidationError: If the arguments cannot describe a command.
    """
    decoder = DECODERS.get(tool)
    if decoder is None:
        raise UnknownToolError(tool)
    return decoder(ArgumentBag(tool, arguments))
