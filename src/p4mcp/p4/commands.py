"""Perforce command model — typed operations and their argument vectors.

Each command variant knows how to turn itself into an :class:`Invocation`
(program + ordered argument list).  Arguments are kept as a discrete vector
and are never joined or shell-quoted: backends pass them straight to
``exec``.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

DEFAULT_PROGRAM = "p4"
DEFAULT_SYNC_PATH = "..."
DEFAULT_CHANGES_MAX = 10


class Invocation(BaseModel):
    """A program name plus its ordered argument vector."""

    model_config = {"frozen": True}

    program: str = DEFAULT_PROGRAM
    args: list[str] = Field(default_factory=list)

    @property
    def argv(self) -> list[str]:
        """Full ``execvp``-style vector, program first."""
        return [self.program, *self.args]


class _Command(BaseModel):
    model_config = {"frozen": True}

    def to_args(self) -> list[str]:
        raise NotImplementedError

    def to_invocation(self, program: str = DEFAULT_PROGRAM) -> Invocation:
        """Build the :class:`Invocation` for this command."""
        return Invocation(program=program, args=self.to_args())


class StatusCommand(_Command):
    """Files open in the workspace, optionally restricted to *path*."""

    kind: Literal["status"] = "status"
    path: str | None = None

    def to_args(self) -> list[str]:
        args = ["opened"]
        if self.path is not None:
            args.append(self.path)
        return args


class SyncCommand(_Command):
    """Bring the workspace up to date with the depot."""

    kind: Literal["sync"] = "sync"
    path: str = DEFAULT_SYNC_PATH
    force: bool = False

    def to_args(self) -> list[str]:
        args = ["sync"]
        if self.force:
            args.append("-f")
        args.append(self.path)
        return args


class EditCommand(_Command):
    kind: Literal["edit"] = "edit"
    files: list[str] = Field(default_factory=list)

    def to_args(self) -> list[str]:
        return ["edit", *self.files]


class AddCommand(_Command):
    kind: Literal["add"] = "add"
    files: list[str] = Field(default_factory=list)

    def to_args(self) -> list[str]:
        return ["add", *self.files]


class SubmitCommand(_Command):
    """Submit the default changelist, or only *files* when given."""

    kind: Literal["submit"] = "submit"
    description: str = ""
    files: list[str] | None = None

    def to_args(self) -> list[str]:
        args = ["submit", "-d", self.description]
        if self.files is not None:
            args.extend(self.files)
        return args


class RevertCommand(_Command):
    kind: Literal["revert"] = "revert"
    files: list[str] = Field(default_factory=list)

    def to_args(self) -> list[str]:
        return ["revert", *self.files]


class OpenedCommand(_Command):
    """Files opened for edit, optionally within one changelist."""

    kind: Literal["opened"] = "opened"
    changelist: str | None = None

    def to_args(self) -> list[str]:
        args = ["opened"]
        if self.changelist is not None:
            args.extend(["-c", self.changelist])
        return args


class ChangesCommand(_Command):
    """The most recent *max* submitted changes, optionally under *path*."""

    kind: Literal["changes"] = "changes"
    max: int = Field(default=DEFAULT_CHANGES_MAX, ge=0)
    path: str | None = None

    def to_args(self) -> list[str]:
        args = ["changes", "-m", str(self.max)]
        if self.path is not None:
            args.append(self.path)
        return args


class InfoCommand(_Command):
    kind: Literal["info"] = "info"

    def to_args(self) -> list[str]:
        return ["info"]


P4Command = Annotated[
    StatusCommand
    | SyncCommand
    | EditCommand
    | AddCommand
    | SubmitCommand
    | RevertCommand
    | OpenedCommand
    | ChangesCommand
    | InfoCommand,
    Field(discriminator="kind"),
]
