"""
Metadata values and parameter building for workflow commands.

Log metadata is a recursive mapping of string keys to either plain strings
or nested mappings.  This module renders those values to the text used in
``key=value`` command parameters and merges persistent handler metadata
with the metadata supplied on a single log call.
"""

from __future__ import annotations

import sys
import traceback
from collections.abc import Mapping
from typing import Any, Union

MetadataValue = Union[str, Mapping[str, "MetadataValue"]]
Metadata = dict[str, MetadataValue]


def render_value(value: Any) -> str:
    """Return the textual form of a metadata value.

    Strings render verbatim, mappings as ``[key: value, ...]`` ordered by
    key, lists and tuples as ``[a, b]``.  Anything else goes through
    ``str()``.  Never raises.
    """
    if isinstance(value, str):
        return value
    try:
        if isinstance(value, Mapping):
            items = sorted(value.items(), key=lambda item: str(item[0]))
            return "[" + ", ".join(f"{k}: {render_value(v)}" for k, v in items) + "]"
        if isinstance(value, (list, tuple)):
            return "[" + ", ".join(render_value(v) for v in value) + "]"
        return str(value)
    except Exception:  # noqa: BLE001
        return f"<unrepresentable {type(value).__name__}>"


def build_parameters(
    persistent: Mapping[str, Any],
    metadata: Mapping[str, Any] | None,
    *,
    file: str,
    line: int | str,
) -> list[tuple[str, str]]:
    """Merge metadata into the ``(key, value)`` parameters of a log command.

    Call metadata overrides persistent metadata; ``file`` and ``line``
    always describe the current call site.

    Args:
        persistent: Metadata stored on the handler.
        metadata: Metadata passed with this log call, if any.
        file: Source file of the call site.
        line: Source line of the call site.

    Returns:
        Unsorted list of rendered ``(key, value)`` pairs.
    """
    merged: dict[str, Any] = dict(persistent)
    if metadata:
        merged.update(metadata)
    merged["file"] = render_value(file)
    merged["line"] = render_value(line)
    return [(str(key), render_value(value)) for key, value in merged.items()]


def describe_exception(exc_info: Any) -> str | None:
    """Summarise ``exc_info`` as a single ``Type: message`` line.

    Accepts ``True`` (current exception), an exception instance or a
    ``sys.exc_info()`` tuple.  Returns ``None`` when there is nothing to
    describe.  Line breaks inside the message are folded into spaces.
    """
    if exc_info is True:
        exc_info = sys.exc_info()
    if isinstance(exc_info, BaseException):
        exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
    if not isinstance(exc_info, tuple) or exc_info[0] is None:
        return None
    text = "".join(traceback.format_exception_only(exc_info[0], exc_info[1]))
    summary = " ".join(part.strip() for part in text.splitlines() if part.strip())
    return summary or exc_info[0].__name__
