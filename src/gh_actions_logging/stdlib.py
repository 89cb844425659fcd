"""
Standard-library :mod:`logging` bridge.

``GitHubActionsHandler`` is a :class:`logging.Handler` that renders records
through a ``GitHubActionsLogHandler``.  Per-call metadata is taken from
``extra={"metadata": {...}}``.  Importing this module registers the
``TRACE`` and ``NOTICE`` level names with :mod:`logging`.
"""

from __future__ import annotations

import logging
from typing import Any

from .handler import GitHubActionsLogHandler
from .levels import Severity
from .metadata import describe_exception

TRACE = int(Severity.TRACE)
NOTICE = int(Severity.NOTICE)

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(NOTICE, "NOTICE")


class GitHubActionsHandler(logging.Handler):
    """Emit :class:`logging.LogRecord` objects as workflow commands.

    Args:
        log_handler: Handler doing the rendering; a standard-output handler
            labelled ``"root"`` if omitted.
        level: Handler threshold; defaults to ``log_handler.log_level``.
    """

    def __init__(
        self,
        log_handler: GitHubActionsLogHandler | None = None,
        level: int | str | None = None,
    ) -> None:
        self.log_handler = log_handler or GitHubActionsLogHandler.standard_output("root")
        if level is None:
            level = int(self.log_handler.log_level)
        super().__init__(level=level)

    def emit(self, record: logging.LogRecord) -> None:
        metadata: dict[str, Any] = dict(getattr(record, "metadata", None) or {})
        if record.exc_info:
            summary = describe_exception(record.exc_info)
            if summary is not None:
                metadata["exception"] = summary
        self.log_handler.log(
            Severity.from_stdlib(record.levelno),
            record.getMessage(),
            metadata or None,
            file=record.pathname,
            function=record.funcName,
            line=record.lineno,
        )
