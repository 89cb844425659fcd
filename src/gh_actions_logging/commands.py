"""
Workflow command model and line serialisation.

A workflow command is one line of output that the GitHub Actions runner
interprets as an instruction::

    ::{command} {key=value,...}::{body}

The command slot holds either a fixed command name or, for the marker that
resumes command processing, the token issued by ``stop-commands``.  Both
cases are modelled as a small tagged union so the line builder treats them
the same way.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID


class CommandName(str, enum.Enum):
    """Fixed workflow command names emitted by the handler."""

    DEBUG = "debug"
    WARNING = "warning"
    ERROR = "error"
    ADD_MASK = "add-mask"
    SET_ENV = "set-env"
    SET_OUTPUT = "set-output"
    ADD_PATH = "add-path"
    STOP_COMMANDS = "stop-commands"


@dataclass(frozen=True, slots=True)
class NamedCommand:
    """A command identified by its name (e.g. ``add-mask``)."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class ResumeMarker:
    """The command that ends a ``stop-commands`` scope: the token itself."""

    token: UUID

    def __str__(self) -> str:
        return str(self.token)


Command = NamedCommand | ResumeMarker


@dataclass(frozen=True, slots=True)
class WorkflowCommand:
    """A fully resolved workflow command ready to be written as one line.

    Attributes:
        command: Command name or resume marker.
        parameters: ``(key, value)`` pairs, already rendered to text.
        value: Command body (log message, masked value, path, ...).
    """

    command: Command
    parameters: tuple[tuple[str, str], ...] = ()
    value: str = ""

    @classmethod
    def named(
        cls,
        name: CommandName | str,
        value: str = "",
        parameters: Iterable[tuple[str, str]] = (),
    ) -> WorkflowCommand:
        """Build a command from a name, body and parameters."""
        if isinstance(name, CommandName):
            name = name.value
        return cls(NamedCommand(name), tuple(parameters), value)

    def render(self) -> str:
        """Serialise to ``::command[ params]::value``.

        Parameters are joined as ``key=value`` and sorted on that joined
        text so the output never depends on mapping order.  Without
        parameters the separating space is omitted.
        """
        line = f"::{self.command}"
        if self.parameters:
            pairs = sorted(f"{key}={value}" for key, value in self.parameters)
            line += " " + ",".join(pairs)
        return f"{line}::{self.value}"
