"""
Output sinks for rendered workflow command lines.

A sink accepts one finished line at a time and appends it to its
destination.  ``StreamSink`` targets the process standard streams, which
is where the GitHub Actions runner reads workflow commands from;
``MemorySink`` keeps lines in a list for tests and for callers that want
to inspect output before forwarding it.
"""

from __future__ import annotations

import sys
import threading
from typing import Literal, Protocol, TextIO

_STREAM_LOCKS = {"stdout": threading.Lock(), "stderr": threading.Lock()}


class OutputSink(Protocol):
    """Destination for rendered lines."""

    def write(self, line: str) -> None:
        """Append *line* as a new line."""
        ...  # pragma: no cover


class StreamSink:
    """Write lines to ``sys.stdout`` or ``sys.stderr``.

    The target stream is looked up on every write so that stream
    replacement (test capture, ``contextlib.redirect_stdout``) is honoured.
    Each line and its newline go out in a single ``write`` call under a
    lock shared by every sink on the same stream, then the stream is
    flushed so the runner sees the command immediately.

    Args:
        target: ``"stdout"`` or ``"stderr"``.
    """

    def __init__(self, target: Literal["stdout", "stderr"] = "stdout") -> None:
        if target not in ("stdout", "stderr"):
            raise ValueError(f"Unsupported output stream: {target!r}")
        self.target = target
        self._lock = _STREAM_LOCKS[target]

    @property
    def stream(self) -> TextIO:
        return getattr(sys, self.target)

    def write(self, line: str) -> None:
        stream = self.stream
        with self._lock:
            stream.write(line + "\n")
            stream.flush()

    def __repr__(self) -> str:
        return f"StreamSink(target={self.target!r})"


class MemorySink:
    """Collect lines in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def write(self, line: str) -> None:
        self.lines.append(line)

    def clear(self) -> None:
        self.lines.clear()

    def __len__(self) -> int:
        return len(self.lines)
