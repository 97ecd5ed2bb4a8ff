"""MockBackend — deterministic canned output for every command.

Used for tests and offline operation.  Output embeds the supplied
parameters verbatim so callers can assert on substrings.  No filesystem
access, no subprocesses, no clocks or counters: the same command always
produces the same text.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from p4mcp.p4.commands import (
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

if TYPE_CHECKING:
    from collections.abc import Callable

    from p4mcp.p4.commands import P4Command

logger = logging.getLogger(__name__)

_MAX_MOCK_CHANGES = 5
_FIRST_MOCK_CHANGE = 12350

_INFO_TEXT = """\
Mock P4 Info:
User name: testuser
Client name: test-client
Client host: test-host
Client root: /workspace/p4/test-client
Current directory: /workspace/p4/test-client/main
Peer address: ssl:perforce.example.com:1666
Client address: 192.168.1.100
Server address: perforce.example.com:1666
Server root: /opt/perforce/depot
Server date: 2024/01/15 12:30:45 -0800 PST
Server uptime: 15:32:18
Server version: P4D/LINUX26X86_64/2023.1/2553040 (2023/06/15)
ServerID: perforce-server
Case Handling: insensitive"""


class MockBackend:
    """Canned-text executor.

    Satisfies the :class:`~p4mcp.p4.backend.P4Backend` protocol and never
    raises for a well-formed command.
    """

    def __init__(self) -> None:
        self._formatters: dict[type, Callable[..., str]] = {
            StatusCommand: self._status,
            SyncCommand: self._sync,
            EditCommand: self._edit,
            AddCommand: self._add,
            SubmitCommand: self._submit,
            RevertCommand: self._revert,
            OpenedCommand: self._opened,
            ChangesCommand: self._changes,
            InfoCommand: self._info,
        }

    async def execute(self, command: P4Command) -> str:
        """Return the canned output for *command*."""
        logger.debug("Mock executing %s", command.to_invocation().argv)
        formatter = self._formatters[type(command)]
        return formatter(command)

    @staticmethod
    def _status(command: StatusCommand) -> str:
        path_info = command.path if command.path is not None else "current directory"
        return (
            f"Mock P4 Status for {path_info}:\n"
            "//depot/main/file1.txt#1 - edit default change (text)\n"
            "//depot/main/file2.cpp#2 - add default change (text)\n"
            "... (mock data)"
        )

    @staticmethod
    def _sync(command: SyncCommand) -> str:
        force_flag = " (forced)" if command.force else ""
        return (
            f"Mock P4 Sync{force_flag}: {command.path}\n"
            f"{command.path}/file1.txt#1 - updating /local/workspace/file1.txt\n"
            f"{command.path}/file2.cpp#2 - updating /local/workspace/file2.cpp\n"
            "... synced 15 files"
        )

    @staticmethod
    def _file_report(title: str, verb: str, files: list[str]) -> str:
        return (
            f"Mock P4 {title}:\n"
            f"Files {verb}:\n"
            f"{', '.join(files)}\n"
            f"... {len(files)} file(s) {verb}"
        )

    def _edit(self, command: EditCommand) -> str:
        return self._file_report("Edit", "opened for edit", command.files)

    def _add(self, command: AddCommand) -> str:
        return self._file_report("Add", "opened for add", command.files)

    def _revert(self, command: RevertCommand) -> str:
        return self._file_report("Revert", "reverted", command.files)

    @staticmethod
    def _submit(command: SubmitCommand) -> str:
        if command.files is not None:
            file_info = f"Specific files: {', '.join(command.files)}"
        else:
            file_info = "All opened files"
        return (
            "Mock P4 Submit:\n"
            f"Change description: {command.description}\n"
            f"Files: {file_info}\n"
            "Change 12345 submitted successfully"
        )

    @staticmethod
    def _opened(command: OpenedCommand) -> str:
        cl_info = f" in changelist {command.changelist}" if command.changelist is not None else ""
        return (
            f"Mock P4 Opened{cl_info}:\n"
            "//depot/main/file1.txt#1 - edit default change (text)\n"
            "//depot/main/file2.cpp#2 - add default change (text)\n"
            "//depot/main/file3.h#1 - edit change 12346 (text)"
        )

    @staticmethod
    def _changes(command: ChangesCommand) -> str:
        path_info = f" for path {command.path}" if command.path is not None else ""
        lines = [f"Mock P4 Changes (max: {command.max}){path_info}:"]
        for i in range(min(command.max, _MAX_MOCK_CHANGES)):
            lines.append(
                f"Change {_FIRST_MOCK_CHANGE - i} on 2024/01/{15 + i} "
                f"by user@workspace 'Sample change description {i + 1}'"
            )
        return "\n".join(lines) + "\n"

    @staticmethod
    def _info(_command: InfoCommand) -> str:
        return _INFO_TEXT
