"""Tests for MockBackend canned output."""

import pytest

from p4mcp.p4.backend import P4Backend
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
from p4mcp.p4.mock_backend import MockBackend

ALL_COMMANDS = [
    StatusCommand(),
    StatusCommand(path="//depot/test/..."),
    SyncCommand(),
    SyncCommand(path="//depot/main/...", force=True),
    EditCommand(files=["a.cpp"]),
    AddCommand(files=[]),
    SubmitCommand(description="Fix", files=["a.cpp"]),
    RevertCommand(files=["a.cpp", "b.h"]),
    OpenedCommand(changelist="42"),
    ChangesCommand(max=0),
    ChangesCommand(max=3, path="//depot/..."),
    InfoCommand(),
]


class TestMockBackend:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(MockBackend(), P4Backend)

    async def test_status(self) -> None:
        text = await MockBackend().execute(StatusCommand(path="//depot/test/..."))
        assert "Mock P4 Status" in text
        assert "//depot/test/..." in text

    async def test_status_without_path(self) -> None:
        text = await MockBackend().execute(StatusCommand())
        assert "current directory" in text

    async def test_sync_forced(self) -> None:
        text = await MockBackend().execute(SyncCommand(path="//depot/main/...", force=True))
        assert "Mock P4 Sync" in text
        assert "(forced)" in text
        assert "//depot/main/..." in text

    async def test_sync_not_forced(self) -> None:
        text = await MockBackend().execute(SyncCommand(path="//depot/main/..."))
        assert "(forced)" not in text

    async def test_edit(self) -> None:
        text = await MockBackend().execute(EditCommand(files=["test.cpp"]))
        assert "Mock P4 Edit" in text
        assert "test.cpp" in text
        assert "1 file(s) opened for edit" in text

    async def test_edit_empty_file_list(self) -> None:
        text = await MockBackend().execute(EditCommand(files=[]))
        assert "0 file(s)" in text

    async def test_add(self) -> None:
        text = await MockBackend().execute(AddCommand(files=["a.cpp", "b.cpp"]))
        assert "Mock P4 Add" in text
        assert "a.cpp, b.cpp" in text
        assert "2 file(s) opened for add" in text

    async def test_revert(self) -> None:
        text = await MockBackend().execute(RevertCommand(files=["x.h"]))
        assert "Mock P4 Revert" in text
        assert "1 file(s) reverted" in text

    async def test_submit_all_files(self) -> None:
        text = await MockBackend().execute(SubmitCommand(description="Fix crash"))
        assert "Change description: Fix crash" in text
        assert "All opened files" in text
        assert "submitted successfully" in text

    async def test_submit_specific_files(self) -> None:
        text = await MockBackend().execute(SubmitCommand(description="d", files=["a.cpp"]))
        assert "Specific files: a.cpp" in text

    async def test_opened_in_changelist(self) -> None:
        text = await MockBackend().execute(OpenedCommand(changelist="12346"))
        assert "Mock P4 Opened in changelist 12346" in text

    async def test_changes_caps_at_five_entries(self) -> None:
        text = await MockBackend().execute(ChangesCommand(max=50, path="//depot/..."))
        assert "Mock P4 Changes (max: 50) for path //depot/..." in text
        assert text.count("Change 123") == 5
        assert "Change 12350" in text
        assert "Change 12346" in text

    async def test_changes_max_zero(self) -> None:
        text = await MockBackend().execute(ChangesCommand(max=0))
        assert "max: 0" in text
        assert "Change 1" not in text

    async def test_info(self) -> None:
        text = await MockBackend().execute(InfoCommand())
        assert "Mock P4 Info" in text
        assert "User name: testuser" in text
        assert "Client name: test-client" in text
        assert "Server version:" in text

    @pytest.mark.parametrize("command", ALL_COMMANDS, ids=lambda c: c.kind)
    async def test_output_is_deterministic(self, command) -> None:
        backend = MockBackend()
        first = await backend.execute(command)
        second = await MockBackend().execute(command)
        assert first == second
        assert first
