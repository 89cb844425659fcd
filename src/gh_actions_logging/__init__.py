"""
gh-actions-logging: log handler emitting GitHub Actions workflow commands.

Renders structured log events as ``::debug``/``::warning``/``::error``
annotation lines and exposes the one-shot workflow commands (masking,
environment variables, output parameters, ``PATH`` entries, suspending
command processing).  Integrates with structlog and the standard-library
:mod:`logging` module.
"""

from gh_actions_logging.commands import CommandName, NamedCommand, ResumeMarker, WorkflowCommand
from gh_actions_logging.config import Settings, get_settings
from gh_actions_logging.facade import WorkflowCommandLogger, WorkflowCommandLoggerFactory
from gh_actions_logging.handler import GitHubActionsLogHandler, LogEvent
from gh_actions_logging.levels import Severity, annotation_command
from gh_actions_logging.logging import configure_logging, get_handler, reset_logging
from gh_actions_logging.sinks import MemorySink, OutputSink, StreamSink
from gh_actions_logging.stdlib import GitHubActionsHandler

__all__ = [
    "CommandName",
    "GitHubActionsHandler",
    "GitHubActionsLogHandler",
    "LogEvent",
    "MemorySink",
    "NamedCommand",
    "OutputSink",
    "ResumeMarker",
    "Settings",
    "Severity",
    "StreamSink",
    "WorkflowCommand",
    "WorkflowCommandLogger",
    "WorkflowCommandLoggerFactory",
    "annotation_command",
    "configure_logging",
    "get_handler",
    "get_settings",
    "reset_logging",
]
