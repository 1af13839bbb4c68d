"""Structlog processors shaping the records written by loggers.

Every record ends up with the keys ``lvl``, ``ts``, ``name``, ``caller``,
``func``, ``msg`` and ``stacktrace`` (each only when it applies) followed by
the application and caller supplied fields.
"""

import os
import traceback
from typing import Any

import structlog

from .config import LogConfig, LogFormat, LogLevel

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_STRUCTLOG_DIR = os.path.dirname(os.path.abspath(structlog.__file__))

# Modules whose frames sit between the caller and the processors.
CALLER_IGNORES = [f"{__package__}.logger", f"{__package__}.default"]

LEADING_KEYS = ("lvl", "ts", "name", "caller", "func", "msg")
TRAILING_KEYS = ("stacktrace",)


def add_level(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add the lowercase level under ``lvl``."""
    event_dict["lvl"] = method_name
    return event_dict


def add_caller(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Collapse the callsite parameters into ``caller`` and ``func``.

    ``caller`` holds the last directory and the file name of the calling
    module together with the line, e.g. ``billing/invoice.py:42``.
    """
    pathname = event_dict.pop("pathname", None)
    lineno = event_dict.pop("lineno", None)
    func_name = event_dict.pop("func_name", None)

    if pathname:
        short = os.path.join(
            os.path.basename(os.path.dirname(pathname)), os.path.basename(pathname)
        )
        event_dict["caller"] = f"{short}:{lineno}" if lineno is not None else short
    if func_name:
        event_dict["func"] = func_name
    return event_dict


class StacktraceAdder:
    """Add the calling stack to records at or above ``min_level``."""

    def __init__(self, min_level: LogLevel = LogLevel.WARN) -> None:
        self.min_level = min_level

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        try:
            level = LogLevel(method_name)
        except ValueError:
            return event_dict

        if self.min_level.enables(level):
            event_dict["stacktrace"] = format_app_stack()
        return event_dict


def format_app_stack() -> str:
    """Format the current stack without logger and structlog frames."""
    frames = [
        frame
        for frame in traceback.extract_stack()
        if not _is_internal(frame.filename)
    ]
    return "".join(traceback.format_list(frames)).rstrip("\n")


def _is_internal(filename: str) -> bool:
    path = os.path.abspath(filename)
    return path.startswith(_PACKAGE_DIR + os.sep) or path.startswith(_STRUCTLOG_DIR + os.sep)


def order_keys(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Put the fixed keys first and the stack trace last."""
    ordered = {key: event_dict.pop(key) for key in LEADING_KEYS if key in event_dict}
    trailing = {key: event_dict.pop(key) for key in TRAILING_KEYS if key in event_dict}
    ordered.update(event_dict)
    ordered.update(trailing)
    return ordered


def create_processor_chain(config: LogConfig) -> list:
    """Create the processor chain for a configuration.

    Args:
    ----
        config: Logger configuration

    Returns:
    -------
        List of processors for structlog, renderer last

    """
    processors: list = [
        add_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
    ]

    if config.add_caller:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.PATHNAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ],
                additional_ignores=CALLER_IGNORES,
            )
        )
        processors.append(add_caller)

    processors.append(StacktraceAdder(config.stacktrace_level))
    processors.append(order_keys)

    if config.format == LogFormat.CONSOLE:
        from .console import RichConsoleRenderer

        processors.append(RichConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer(default=str))

    return processors
