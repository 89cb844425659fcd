"""Shared fixtures and helpers for gh-actions-logging tests."""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path

import pytest

# Make helpers in this module importable from test files
# (needed with --import-mode=importlib).
sys.path.insert(0, str(Path(__file__).resolve().parent))

from gh_actions_logging import GitHubActionsLogHandler, MemorySink  # noqa: E402
from gh_actions_logging.config import get_settings  # noqa: E402
from gh_actions_logging.logging import reset_logging  # noqa: E402

_COMMAND_LINE = re.compile(r"^::(?P<command>[^ :]+)(?: (?P<params>.*?))?::(?P<value>.*)$", re.S)


def parse_command(line: str) -> tuple[str, dict[str, str], str]:
    """Split a workflow command line into ``(command, parameters, value)``."""
    match = _COMMAND_LINE.match(line)
    assert match is not None, f"not a workflow command: {line!r}"
    params: dict[str, str] = {}
    if match["params"]:
        for pair in match["params"].split(","):
            key, _, value = pair.partition("=")
            params[key] = value
    return match["command"], params, match["value"]


def param_block(line: str) -> str:
    """Return the raw ``key=value,...`` block of a command line."""
    match = _COMMAND_LINE.match(line)
    assert match is not None, f"not a workflow command: {line!r}"
    return match["params"] or ""


# ─── Fixtures ────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch):
    """Drop ``GHA_LOG_`` variables and cached settings around each test."""
    for key in list(os.environ):
        if key.startswith("GHA_LOG_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    reset_logging()


@pytest.fixture()
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture()
def handler(sink: MemorySink) -> GitHubActionsLogHandler:
    return GitHubActionsLogHandler(sink, label="tests")
