"""
structlog bootstrap for GitHub Actions workflow commands.

``configure_logging`` installs a processor chain that adds call-site
information to every event and routes it to a
``WorkflowCommandLoggerFactory``, so that::

    log = structlog.get_logger("build")
    log.warning("missing semicolon", target="lib")

prints ``::warning file=...,line=...,target=lib::missing semicolon``.
"""

from __future__ import annotations

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder

from .config import Settings, get_settings
from .facade import (
    WorkflowCommandLoggerFactory,
    make_bound_logger,
    shape_log_call,
    summarize_exception,
)
from .handler import GitHubActionsLogHandler
from .sinks import OutputSink, StreamSink

logger = structlog.get_logger(__name__)

_factory: WorkflowCommandLoggerFactory | None = None


def configure_logging(
    settings: Settings | None = None,
    *,
    sink: OutputSink | None = None,
) -> WorkflowCommandLoggerFactory:
    """Configure structlog to emit workflow commands.

    Args:
        settings: Configuration to apply; the cached environment settings
            if omitted.
        sink: Destination overriding ``settings.output``.

    Returns:
        The logger factory, giving access to the per-label handlers.
    """
    global _factory

    settings = settings or get_settings()
    level = settings.severity
    factory = WorkflowCommandLoggerFactory(
        sink if sink is not None else StreamSink(settings.output),
        log_level=level,
        default_label=settings.default_label,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            summarize_exception,
            CallsiteParameterAdder(
                {
                    CallsiteParameter.PATHNAME,
                    CallsiteParameter.FUNC_NAME,
                    CallsiteParameter.LINENO,
                },
                additional_ignores=[__package__],
            ),
            shape_log_call,
        ],
        wrapper_class=make_bound_logger(level),
        logger_factory=factory,
        cache_logger_on_first_use=False,
    )
    _factory = factory

    logger.trace(
        "workflow_command_logging_configured",
        log_level=level.name.lower(),
        output=settings.output if sink is None else type(sink).__name__,
    )
    return factory


def get_handler(label: str | None = None) -> GitHubActionsLogHandler:
    """Return the handler structlog uses for *label*.

    Raises:
        RuntimeError: If :func:`configure_logging` has not been called.
    """
    if _factory is None:
        raise RuntimeError("configure_logging() must be called before get_handler()")
    return _factory.handler_for(label)


def reset_logging() -> None:
    """Restore structlog defaults and forget the configured factory."""
    global _factory
    structlog.reset_defaults()
    _factory = None
