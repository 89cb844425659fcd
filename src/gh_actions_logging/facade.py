"""
structlog integration for the workflow-command handler.

structlog acts as the logging facade: it filters events below the
configured level, merges bound context and call-site information, and
hands the finished event to a *wrapped logger*.  Here the wrapped logger
is a thin ``WorkflowCommandLogger`` that forwards to the
``GitHubActionsLogHandler`` registered for its label.

Bound context and keyword arguments of a log call become the call's
metadata; the handler's own persistent metadata is merged underneath.
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from typing import Any

import structlog

from .handler import GitHubActionsLogHandler
from .levels import Severity
from .metadata import describe_exception, render_value
from .sinks import OutputSink, StreamSink

EventDict = MutableMapping[str, Any]

DEFAULT_LABEL = "github-actions"

_STRUCTLOG_LEVELS = (10, 20, 30, 40, 50)


def filtering_level(severity: Severity) -> int:
    """Return the standard level structlog filters its built-in methods at.

    A standard level passes *severity* exactly when it passes the next
    standard level at or above it, so rounding up keeps the built-in
    methods exact.  ``trace`` and ``notice`` are filtered separately by
    :func:`make_bound_logger`.
    """
    for level in _STRUCTLOG_LEVELS:
        if level >= severity:
            return level
    return _STRUCTLOG_LEVELS[-1]


def _severity_method(severity: Severity) -> Callable[..., Any]:
    name = severity.name.lower()

    def meth(self: Any, event: str, *args: Any, **kw: Any) -> Any:
        if severity < self.threshold:
            return None
        return self._proxy_to_logger(name, event % args if args else event, **kw)

    meth.__name__ = name
    return meth


def make_bound_logger(threshold: Severity | int | str) -> type:
    """Return a structlog bound logger class filtering at *threshold*.

    Extends :func:`structlog.make_filtering_bound_logger` with ``trace``
    and ``notice`` methods, and lets ``log()`` take any ``Severity`` value.
    Every method drops events below the exact threshold.
    """
    threshold = Severity.parse(threshold)
    base = structlog.make_filtering_bound_logger(filtering_level(threshold))

    def log(self: Any, level: int, event: str, *args: Any, **kw: Any) -> Any:
        if level < self.threshold:
            return None
        name = Severity.from_stdlib(level).name.lower()
        return self._proxy_to_logger(name, event % args if args else event, **kw)

    return type(
        f"WorkflowCommandBoundLoggerAt{threshold.name.capitalize()}",
        (base,),
        {
            "threshold": threshold,
            "trace": _severity_method(Severity.TRACE),
            "notice": _severity_method(Severity.NOTICE),
            "log": log,
            "is_enabled_for": lambda self, level: level >= self.threshold,
            "get_effective_level": lambda self: int(self.threshold),
        },
    )


# ── Processors ──


def summarize_exception(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace ``exc_info`` with a one-line ``exception`` entry.

    Workflow commands are single lines, so tracebacks are reduced to
    ``Type: message``.
    """
    exc_info = event_dict.pop("exc_info", None)
    if exc_info:
        summary = describe_exception(exc_info)
        if summary is not None:
            event_dict["exception"] = summary
    return event_dict


def shape_log_call(logger: Any, method_name: str, event_dict: EventDict) -> dict[str, Any]:
    """Final processor: turn the event dict into ``WorkflowCommandLogger`` kwargs.

    Expects the ``pathname``, ``func_name`` and ``lineno`` keys added by
    :class:`structlog.processors.CallsiteParameterAdder`.  Every other key
    apart from ``event`` is passed on as call metadata.
    """
    message = event_dict.pop("event", "")
    file = event_dict.pop("pathname", "<unknown>")
    function = event_dict.pop("func_name", "")
    line = event_dict.pop("lineno", 0)
    return {
        "message": render_value(message),
        "metadata": dict(event_dict) or None,
        "file": file,
        "function": function,
        "line": line,
    }


# ── Wrapped logger ──


class WorkflowCommandLogger:
    """structlog wrapped logger writing through a ``GitHubActionsLogHandler``.

    Each method corresponds to a structlog method name; the level it maps
    to decides the annotation command.
    """

    def __init__(self, handler: GitHubActionsLogHandler) -> None:
        self.handler = handler

    def __repr__(self) -> str:
        return f"<WorkflowCommandLogger(label={self.handler.label!r})>"

    def _emit(
        self,
        severity: Severity,
        message: str = "",
        metadata: dict[str, Any] | None = None,
        file: str = "<unknown>",
        function: str = "",
        line: int = 0,
    ) -> None:
        self.handler.log(severity, message, metadata, file=file, function=function, line=line)

    def trace(self, *args: Any, **kwargs: Any) -> None:
        self._emit(Severity.TRACE, *args, **kwargs)

    def debug(self, *args: Any, **kwargs: Any) -> None:
        self._emit(Severity.DEBUG, *args, **kwargs)

    def info(self, *args: Any, **kwargs: Any) -> None:
        self._emit(Severity.INFO, *args, **kwargs)

    def notice(self, *args: Any, **kwargs: Any) -> None:
        self._emit(Severity.NOTICE, *args, **kwargs)

    def warning(self, *args: Any, **kwargs: Any) -> None:
        self._emit(Severity.WARNING, *args, **kwargs)

    def error(self, *args: Any, **kwargs: Any) -> None:
        self._emit(Severity.ERROR, *args, **kwargs)

    def critical(self, *args: Any, **kwargs: Any) -> None:
        self._emit(Severity.CRITICAL, *args, **kwargs)

    msg = info
    warn = warning
    exception = error
    fatal = critical


# ── Logger factory ──


class WorkflowCommandLoggerFactory:
    """structlog logger factory keeping one handler per label.

    ``structlog.get_logger("name")`` resolves to the handler registered for
    ``"name"``; ``structlog.get_logger()`` uses *default_label*.  All
    handlers share one sink so lines stay in emission order.

    Args:
        sink: Destination for every handler; standard output if omitted.
        log_level: Level reported by the handlers created here.
        default_label: Label used when ``get_logger`` gets no name.
    """

    def __init__(
        self,
        sink: OutputSink | None = None,
        *,
        log_level: Severity | int | str = Severity.DEBUG,
        default_label: str = DEFAULT_LABEL,
    ) -> None:
        self.sink = sink if sink is not None else StreamSink("stdout")
        self.log_level = Severity.parse(log_level)
        self.default_label = default_label
        self._handlers: dict[str, GitHubActionsLogHandler] = {}

    def handler_for(self, label: str | None = None) -> GitHubActionsLogHandler:
        """Return the handler for *label*, creating it on first use."""
        label = self.default_label if label is None else str(label)
        handler = self._handlers.get(label)
        if handler is None:
            handler = GitHubActionsLogHandler(self.sink, label=label, log_level=self.log_level)
            self._handlers[label] = handler
        return handler

    @property
    def labels(self) -> list[str]:
        return sorted(self._handlers)

    def __call__(self, *args: Any) -> WorkflowCommandLogger:
        label = args[0] if args and args[0] is not None else None
        return WorkflowCommandLogger(self.handler_for(label))
