"""Tests for per-tool argument decoding."""

import pytest

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
from p4mcp.protocol.arguments import decode_arguments
from p4mcp.protocol.errors import ArgumentValidationError, UnknownToolError


class TestDecodeArguments:
    def test_status(self) -> None:
        assert decode_arguments("p4_status", {"path": "//depot/..."}) == StatusCommand(path="//depot/...")
        assert decode_arguments("p4_status", {}) == StatusCommand()

    def test_sync_defaults(self) -> None:
        assert decode_arguments("p4_sync", {}) == SyncCommand(path="...", force=False)

    def test_sync(self) -> None:
        cmd = decode_arguments("p4_sync", {"path": "//depot/main/...", "force": True})
        assert cmd == SyncCommand(path="//depot/main/...", force=True)

    @pytest.mark.parametrize(("raw", "expected"), [("true", True), ("False", False), ("1", True)])
    def test_sync_force_string_coercion(self, raw: str, expected: bool) -> None:
        assert decode_arguments("p4_sync", {"force": raw}).force is expected  # type: ignore[union-attr]

    def test_sync_force_garbage_uses_default(self) -> None:
        assert decode_arguments("p4_sync", {"force": "maybe"}).force is False  # type: ignore[union-attr]

    def test_edit_add_revert(self) -> None:
        files = ["src/main.cpp", "include/header.h"]
        assert decode_arguments("p4_edit", {"files": files}) == EditCommand(files=files)
        assert decode_arguments("p4_add", {"files": files}) == AddCommand(files=files)
        assert decode_arguments("p4_revert", {"files": files}) == RevertCommand(files=files)

    def test_missing_required_files_defaults_to_empty(self) -> None:
        assert decode_arguments("p4_edit", {}) == EditCommand(files=[])

    def test_non_string_file_entries_are_dropped(self) -> None:
        cmd = decode_arguments("p4_add", {"files": ["a.cpp", 3, None, "b.cpp"]})
        assert cmd == AddCommand(files=["a.cpp", "b.cpp"])

    def test_single_file_string_is_wrapped(self) -> None:
        assert decode_arguments("p4_edit", {"files": "a.cpp"}) == EditCommand(files=["a.cpp"])

    def test_submit(self) -> None:
        cmd = decode_arguments("p4_submit", {"description": "Fix bug", "files": ["a.cpp"]})
        assert cmd == SubmitCommand(description="Fix bug", files=["a.cpp"])

    def test_submit_missing_description_degrades(self) -> None:
        assert decode_arguments("p4_submit", {}) == SubmitCommand(description="", files=None)

    def test_opened(self) -> None:
        assert decode_arguments("p4_opened", {"changelist": "12345"}) == OpenedCommand(changelist="12345")
        assert decode_arguments("p4_opened", {"changelist": 12345}) == OpenedCommand(changelist="12345")
        assert decode_arguments("p4_opened", {}) == OpenedCommand()

    def test_changes(self) -> None:
        assert decode_arguments("p4_changes", {}) == ChangesCommand(max=10)
        assert decode_arguments("p4_changes", {"max": 0}) == ChangesCommand(max=0)
        assert decode_arguments("p4_changes", {"max": "25", "path": "//x/..."}) == ChangesCommand(
            max=25, path="//x/..."
        )
        assert decode_arguments("p4_changes", {"max": 5.0}) == ChangesCommand(max=5)

    def test_changes_bool_max_ignored(self) -> None:
        assert decode_arguments("p4_changes", {"max": True}) == ChangesCommand(max=10)

    def test_changes_negative_max_rejected(self) -> None:
        with pytest.raises(ArgumentValidationError, match="max must be >= 0"):
            decode_arguments("p4_changes", {"max": -1})

    def test_info_ignores_arguments(self) -> None:
        assert decode_arguments("p4_info", {"anything": 1}) == InfoCommand()

    def test_null_arguments_treated_as_empty(self) -> None:
        assert decode_arguments("p4_status", None) == StatusCommand()

    @pytest.mark.parametrize("arguments", [[], "path", 3])
    def test_non_object_arguments_rejected(self, arguments: object) -> None:
        with pytest.raises(ArgumentValidationError, match="must be an object"):
            decode_arguments("p4_status", arguments)

    def test_wrong_type_path_uses_default(self) -> None:
        assert decode_arguments("p4_sync", {"path": 42}) == SyncCommand(path="...")

    def test_unknown_tool(self) -> None:
        with pytest.raises(UnknownToolError):
            decode_arguments("p4_obliterate", {})
