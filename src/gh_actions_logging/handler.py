"""
GitHub Actions workflow-command log handler.

``GitHubActionsLogHandler`` is the sink a logging facade hands log events
to.  Each event becomes one annotation command line::

    ::{debug|warning|error} file={file},line={line},...::{message}

The handler also exposes the one-shot workflow commands (masking values,
exporting environment variables and output parameters, prepending to
``PATH``) and a scope that suspends command processing by the runner.

See https://docs.github.com/en/actions/reference/workflow-commands-for-github-actions
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, TypeVar
from uuid import UUID, uuid4

from .commands import CommandName, ResumeMarker, WorkflowCommand
from .levels import Severity, annotation_command
from .metadata import Metadata, MetadataValue, build_parameters, render_value
from .sinks import OutputSink, StreamSink

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class LogEvent:
    """A single log call as received from a logging facade.

    Attributes:
        severity: Level the message was logged at.
        message: Rendered log message.
        metadata: Metadata passed with this call only.
        file: Source file of the call site.
        function: Function of the call site.
        line: Source line of the call site.
    """

    severity: Severity
    message: str
    metadata: Mapping[str, Any] | None
    file: str
    function: str
    line: int


class GitHubActionsLogHandler:
    """Render log events and workflow commands onto an output sink.

    The handler owns its persistent metadata: copies made with
    :func:`copy.copy` or :meth:`copy` get an independent mapping, so
    changing metadata on one handler never leaks into another.

    Args:
        sink: Destination for rendered lines.
        label: Name of the logger this handler serves.
        log_level: Minimum severity the facade should forward.
    """

    def __init__(
        self,
        sink: OutputSink,
        *,
        label: str = "",
        log_level: Severity | int | str = Severity.DEBUG,
    ) -> None:
        self._sink = sink
        self.label = label
        self._log_level = Severity.parse(log_level)
        self._metadata: Metadata = {}

    @classmethod
    def standard_output(cls, label: str) -> GitHubActionsLogHandler:
        """Return a handler that writes to standard output."""
        return cls(StreamSink("stdout"), label=label)

    # ── Configuration ──

    @property
    def sink(self) -> OutputSink:
        return self._sink

    @property
    def log_level(self) -> Severity:
        """Minimum severity forwarded by the facade."""
        return self._log_level

    @log_level.setter
    def log_level(self, value: Severity | int | str) -> None:
        self._log_level = Severity.parse(value)

    @property
    def metadata(self) -> Metadata:
        """A copy of the persistent metadata."""
        return copy.deepcopy(self._metadata)

    @metadata.setter
    def metadata(self, value: Mapping[str, MetadataValue]) -> None:
        self._metadata = copy.deepcopy(dict(value))

    def __getitem__(self, key: str) -> MetadataValue | None:
        """Return the persistent metadata value for *key*, or ``None``."""
        return self._metadata.get(key)

    def __setitem__(self, key: str, value: MetadataValue | None) -> None:
        """Set a persistent metadata value; ``None`` removes the key."""
        if value is None:
            self._metadata.pop(key, None)
        else:
            self._metadata[key] = value

    def __delitem__(self, key: str) -> None:
        self._metadata.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._metadata

    def copy(self) -> GitHubActionsLogHandler:
        """Return a handler sharing the sink but owning a copy of the metadata."""
        return copy.copy(self)

    def __copy__(self) -> GitHubActionsLogHandler:
        clone = type(self)(self._sink, label=self.label, log_level=self._log_level)
        clone._metadata = copy.deepcopy(self._metadata)
        return clone

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(label={self.label!r}, "
            f"log_level={self._log_level.name}, sink={self._sink!r})"
        )

    # ── Logging messages ──

    def log(
        self,
        level: Severity | int | str,
        message: str,
        metadata: Mapping[str, Any] | None = None,
        *,
        file: str,
        function: str,
        line: int,
    ) -> None:
        """Emit one log message as an annotation command.

        The facade has already checked *level* against :attr:`log_level`.
        """
        self.render(
            LogEvent(
                severity=Severity.parse(level),
                message=message,
                metadata=metadata,
                file=file,
                function=function,
                line=line,
            )
        )

    def render(self, event: LogEvent) -> None:
        """Write *event* to the sink as ``::{command} {params}::{message}``."""
        parameters = build_parameters(
            self._metadata, event.metadata, file=event.file, line=event.line,
        )
        self._echo(
            WorkflowCommand.named(
                annotation_command(event.severity),
                value=render_value(event.message),
                parameters=parameters,
            )
        )

    # ── One-shot commands ──

    def mask(self, value: str) -> None:
        """Have the runner redact *value* from all subsequent output.

        ``::add-mask::{value}``
        """
        self._echo(WorkflowCommand.named(CommandName.ADD_MASK, value))

    def set_environment_variable(self, name: str, value: str) -> None:
        """Create or update an environment variable for the following steps.

        ``::set-env name={name}::{value}``
        """
        self._echo(WorkflowCommand.named(CommandName.SET_ENV, value, [("name", name)]))

    def set_output_parameter(self, name: str, value: str) -> None:
        """Set an output parameter of the current step.

        ``::set-output name={name}::{value}``
        """
        self._echo(WorkflowCommand.named(CommandName.SET_OUTPUT, value, [("name", name)]))

    def add_system_path(self, path: str) -> None:
        """Prepend *path* to ``PATH`` for the following steps.

        ``::add-path::{path}``
        """
        self._echo(WorkflowCommand.named(CommandName.ADD_PATH, path))

    # ── Ignoring workflow commands ──

    @contextmanager
    def stop_commands(self) -> Iterator[UUID]:
        """Suspend command processing by the runner for the ``with`` block.

        Lines written inside the block are shown as plain text.  The resume
        marker is written on exit even when the block raises.

        Yields:
            The token pairing the ``stop-commands`` line with the resume
            marker.
        """
        token = uuid4()
        self._echo(WorkflowCommand.named(CommandName.STOP_COMMANDS, str(token)))
        try:
            yield token
        finally:
            self._echo(WorkflowCommand(ResumeMarker(token)))

    def without_processing_workflow_commands(self, body: Callable[[], T]) -> T:
        """Run *body* while the runner ignores workflow commands.

        ::

            ::stop-commands::{token}
            ...
            ::{token}::

        Returns:
            Whatever *body* returns.
        """
        with self.stop_commands():
            return body()

    # ──

    def _echo(self, command: WorkflowCommand) -> None:
        self._sink.write(command.render())
