"""
Log severities for gh-actions-logging.

Defines the ordered ``Severity`` scale accepted by the workflow-command
handler and the folding of that scale onto the three annotation commands
the GitHub Actions runner understands (``debug``, ``warning``, ``error``).

Numeric values line up with the standard-library logging levels so a
threshold can be handed to structlog or :mod:`logging` unchanged.
"""

from __future__ import annotations

import enum

_ALIASES = {
    "warn": "warning",
    "fatal": "critical",
}


class Severity(enum.IntEnum):
    """Ordered log severity (``TRACE`` lowest, ``CRITICAL`` highest)."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    NOTICE = 25
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @classmethod
    def parse(cls, value: Severity | int | str) -> Severity:
        """Coerce a member, numeric level or level name into a ``Severity``.

        Names are case-insensitive; ``warn`` and ``fatal`` are accepted as
        aliases of ``warning`` and ``critical``.

        Raises:
            ValueError: If *value* does not name a known severity.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        name = str(value).strip().lower()
        name = _ALIASES.get(name, name)
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {value!r}") from None

    @classmethod
    def from_stdlib(cls, levelno: int) -> Severity:
        """Map an arbitrary numeric level to the closest severity not above it."""
        matched = cls.TRACE
        for member in cls:
            if member <= levelno:
                matched = member
        return matched


# ── Command mapping ──


def annotation_command(severity: Severity) -> str:
    """Return the workflow command a log event of *severity* is emitted as.

    ``ERROR`` and above become ``error``, ``WARNING`` becomes ``warning`` and
    every finer level is folded into ``debug`` (only shown by the runner when
    step debug logging is enabled).
    """
    if severity >= Severity.ERROR:
        return "error"
    if severity == Severity.WARNING:
        return "warning"
    return "debug"
