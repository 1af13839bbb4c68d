"""Leveled structured logger with PII resolution.

Every level has three methods:

- ``info(*args)`` writes the operands as the message,
- ``infof(template, *args)`` writes a printf-style formatted message,
- ``infow(msg, *key_value_pairs)`` writes a message with structured fields.

Only the structured ``*w`` methods and ``with_fields`` resolve PII fields.
The plain and formatted forms write their operands as they are.

``fatal``, ``fatalf`` and ``fatalw`` exit the process with status 1 after the
record has been written and flushed. ``panic``, ``panicf`` and ``panicw``
raise ``LoggerPanicError`` after writing.
"""

import sys
from collections.abc import Mapping, Sequence
from contextlib import suppress
from typing import Any

import structlog

from .config import LogConfig, LogLevel, load_config
from .exceptions import LoggerConfigurationError, LoggerNotInitializedError, LoggerPanicError, LoggerSyncError
from .pii import PIIField, PIIMode, ResolvedPIIField
from .processors import create_processor_chain
from .writer import LevelRoutingWriter, NopWriter


class FieldBoundLogger(structlog.BoundLoggerBase):
    """Structlog bound logger writing a message and a dict of fields."""

    def emit(self, method_name: str, msg: str, fields: dict[str, Any]) -> None:
        try:
            args, kw = self._process_event(method_name, None, {**fields, "msg": msg})
        except structlog.DropEvent:
            return
        getattr(self._logger, method_name)(*args, **kw)

    def sync(self) -> None:
        self._logger.sync()


def resolve_pii_fields(mode: PIIMode, key_value_pairs: Sequence[Any]) -> list[Any]:
    """Resolve the PII fields in a key/value sequence.

    Each ``PIIField`` is replaced by its ``ResolvedPIIField`` for ``mode``.
    Omitted resolutions are dropped. A PII field in the value slot of a key
    replaces the whole pair, since the field carries its own key. An absent
    custom PII field resolves to nothing, so it is dropped with its key too.
    ``None`` in a field slot is dropped; as a value it stays a null value.
    All other elements keep their position.
    """
    out: list[Any] = []
    i = 0
    n = len(key_value_pairs)

    while i < n:
        element = key_value_pairs[i]

        if element is None:
            i += 1
            continue

        if isinstance(element, PIIField):
            _append_resolved(out, element.resolve(mode))
            i += 1
            continue

        if isinstance(element, ResolvedPIIField):
            _append_resolved(out, element)
            i += 1
            continue

        if i + 1 < n:
            value = key_value_pairs[i + 1]
            if isinstance(value, PIIField):
                _append_resolved(out, value.resolve(mode))
            else:
                out.extend((element, value))
            i += 2
            continue

        out.append(element)
        i += 1

    return out


def _append_resolved(out: list[Any], resolved: ResolvedPIIField | None) -> None:
    if resolved is None or resolved.omitted:
        return
    out.append(resolved)


def _sprint(args: Sequence[Any]) -> str:
    """Join operands, with a space between two operands that are not strings."""
    parts: list[str] = []
    for i, arg in enumerate(args):
        if i > 0 and not isinstance(arg, str) and not isinstance(args[i - 1], str):
            parts.append(" ")
        parts.append(str(arg))
    return "".join(parts)


def _sprintf(template: str, args: Sequence[Any]) -> str:
    if not args:
        return template
    params: Any = tuple(args)
    if len(args) == 1 and isinstance(args[0], Mapping):
        params = args[0]
    try:
        return template % params
    except (TypeError, ValueError, KeyError):
        return f"{template} {list(args)!r}"


class Logger:
    """Leveled structured logger.

    Build loggers with ``new_logger``, ``must_new_logger`` or
    ``new_nop_logger``. A ``Logger`` created without a backend is
    uninitialized: every method on it writes an emergency record to stderr
    and raises ``LoggerNotInitializedError``.
    """

    __slots__ = ("_backend", "_level", "_pii_mode")

    def __init__(
        self,
        backend: FieldBoundLogger | None = None,
        level: LogLevel | None = LogLevel.INFO,
        pii_mode: PIIMode = PIIMode.NONE,
    ) -> None:
        self._backend = backend
        self._level = level
        self._pii_mode = pii_mode

    @property
    def level(self) -> LogLevel | None:
        return self._level

    @property
    def pii_mode(self) -> PIIMode:
        return self._pii_mode

    def __repr__(self) -> str:
        level = self._level.value if self._level is not None else "off"
        return f"<Logger level={level} pii_mode={self._pii_mode.value}>"

    def enabled(self, level: LogLevel) -> bool:
        """Whether records of ``level`` are written."""
        return self._level is not None and self._level.enables(level)

    def debug(self, *args: Any) -> None:
        """Log all operands on the debug level."""
        self._log(LogLevel.DEBUG, args)

    def debugf(self, template: str, *args: Any) -> None:
        """Format and log the operands on the debug level."""
        self._logf(LogLevel.DEBUG, template, args)

    def debugw(self, msg: str, *key_value_pairs: Any) -> None:
        """Log a message and fields on the debug level."""
        self._logw(LogLevel.DEBUG, msg, key_value_pairs)

    def info(self, *args: Any) -> None:
        """Log all operands on the info level."""
        self._log(LogLevel.INFO, args)

    def infof(self, template: str, *args: Any) -> None:
        """Format and log the operands on the info level."""
        self._logf(LogLevel.INFO, template, args)

    def infow(self, msg: str, *key_value_pairs: Any) -> None:
        """Log a message and fields on the info level."""
        self._logw(LogLevel.INFO, msg, key_value_pairs)

    def warn(self, *args: Any) -> None:
        """Log all operands on the warn level."""
        self._log(LogLevel.WARN, args)

    def warnf(self, template: str, *args: Any) -> None:
        """Format and log the operands on the warn level."""
        self._logf(LogLevel.WARN, template, args)

    def warnw(self, msg: str, *key_value_pairs: Any) -> None:
        """Log a message and fields on the warn level."""
        self._logw(LogLevel.WARN, msg, key_value_pairs)

    def error(self, *args: Any) -> None:
        """Log all operands on the error level."""
        self._log(LogLevel.ERROR, args)

    def errorf(self, template: str, *args: Any) -> None:
        """Format and log the operands on the error level."""
        self._logf(LogLevel.ERROR, template, args)

    def errorw(self, msg: str, *key_value_pairs: Any) -> None:
        """Log a message and fields on the error level."""
        self._logw(LogLevel.ERROR, msg, key_value_pairs)

    def panic(self, *args: Any) -> None:
        """Log all operands on the panic level, then raise LoggerPanicError."""
        self._log(LogLevel.PANIC, args)

    def panicf(self, template: str, *args: Any) -> None:
        """Format and log the operands on the panic level, then raise LoggerPanicError."""
        self._logf(LogLevel.PANIC, template, args)

    def panicw(self, msg: str, *key_value_pairs: Any) -> None:
        """Log a message and fields on the panic level, then raise LoggerPanicError."""
        self._logw(LogLevel.PANIC, msg, key_value_pairs)

    def fatal(self, *args: Any) -> None:
        """Log all operands on the fatal level and exit with status 1."""
        self._log(LogLevel.FATAL, args)

    def fatalf(self, template: str, *args: Any) -> None:
        """Format and log the operands on the fatal level and exit with status 1."""
        self._logf(LogLevel.FATAL, template, args)

    def fatalw(self, msg: str, *key_value_pairs: Any) -> None:
        """Log a message and fields on the fatal level and exit with status 1."""
        self._logw(LogLevel.FATAL, msg, key_value_pairs)

    def with_fields(self, *key_value_pairs: Any) -> "Logger":
        """Return a new logger adding the fields to every record.

        PII fields are resolved now, with this logger's mode. The new logger
        keeps the level and PII mode; this logger is left as it is.
        """
        _handle_uninitialized(self)
        fields = self._sweeten(resolve_pii_fields(self._pii_mode, key_value_pairs))
        return Logger(self._backend.bind(**fields), self._level, self._pii_mode)

    def named(self, name: str) -> "Logger":
        """Return a new logger whose records carry ``name``.

        Names of nested calls are joined with dots.
        """
        _handle_uninitialized(self)
        if not name:
            return self
        current = structlog.get_context(self._backend).get("name")
        full_name = f"{current}.{name}" if current else name
        return Logger(self._backend.bind(name=full_name), self._level, self._pii_mode)

    def sync(self) -> None:
        """Flush buffered records.

        Raises
        ------
            LoggerSyncError: if the output cannot be flushed

        """
        _handle_uninitialized(self)
        self._backend.sync()

    def _log(self, level: LogLevel, args: Sequence[Any]) -> None:
        _handle_uninitialized(self)
        msg = _sprint(args)
        if self.enabled(level):
            self._backend.emit(level.value, msg, {})
        self._terminate(level, msg)

    def _logf(self, level: LogLevel, template: str, args: Sequence[Any]) -> None:
        _handle_uninitialized(self)
        msg = _sprintf(template, args)
        if self.enabled(level):
            self._backend.emit(level.value, msg, {})
        self._terminate(level, msg)

    def _logw(self, level: LogLevel, msg: str, key_value_pairs: Sequence[Any]) -> None:
        _handle_uninitialized(self)
        if self.enabled(level):
            fields = self._sweeten(resolve_pii_fields(self._pii_mode, key_value_pairs))
            self._backend.emit(level.value, msg, fields)
        self._terminate(level, msg)

    def _terminate(self, level: LogLevel, msg: str) -> None:
        if level == LogLevel.PANIC:
            raise LoggerPanicError(msg)
        if level == LogLevel.FATAL:
            # The process exits either way.
            with suppress(LoggerSyncError):
                self.sync()
            sys.exit(1)

    def _sweeten(self, items: Sequence[Any]) -> dict[str, Any]:
        """Turn resolved fields and key/value pairs into a dict of fields."""
        fields: dict[str, Any] = {}
        invalid: list[list[Any]] = []
        i = 0

        while i < len(items):
            item = items[i]

            if isinstance(item, ResolvedPIIField):
                fields[item.key] = item.value
                i += 1
                continue

            if i == len(items) - 1:
                self._report(LogLevel.ERROR, "Ignored key without a value.", {"ignored": item})
                break

            key, value = item, items[i + 1]
            if isinstance(key, str):
                fields[key] = value
            else:
                invalid.append([key, value])
            i += 2

        if invalid:
            self._report(
                LogLevel.ERROR, "Ignored key-value pairs with non-string keys.", {"invalid": invalid}
            )
        return fields

    def _report(self, level: LogLevel, msg: str, fields: dict[str, Any]) -> None:
        if self.enabled(level):
            self._backend.emit(level.value, msg, fields)


def build_backend(config: LogConfig, writer: Any = None) -> FieldBoundLogger:
    """Create the structlog backend of a logger.

    Args:
    ----
        config: Validated logger configuration
        writer: Wrapped logger receiving rendered records. Defaults to a
            ``LevelRoutingWriter`` on stdout and stderr.

    Returns:
    -------
        Bound logger carrying the app and version fields

    """
    initial_values: dict[str, Any] = {}
    if config.app_name:
        initial_values["app"] = config.app_name
    if config.version:
        initial_values["version"] = config.version

    return structlog.wrap_logger(
        writer if writer is not None else LevelRoutingWriter(),
        processors=create_processor_chain(config),
        wrapper_class=FieldBoundLogger,
        context_class=dict,
        **initial_values,
    ).bind()


def new_logger(
    config: LogConfig | dict[str, Any] | None = None,
    *,
    writer: Any = None,
    **overrides: Any,
) -> Logger:
    """Create a logger.

    Args:
    ----
        config: Configuration, a mapping of its fields, or None to read the
            LOG_ environment variables
        writer: Wrapped logger receiving rendered records
        **overrides: Configuration fields replacing those of ``config``

    Returns:
    -------
        The configured logger

    Raises:
    ------
        LoggerConfigurationError: if the configuration does not validate

    """
    config = load_config(config, **overrides)
    backend = build_backend(config, writer)
    return Logger(backend, config.level, config.pii_mode)


def must_new_logger(
    config: LogConfig | dict[str, Any] | None = None,
    *,
    writer: Any = None,
    **overrides: Any,
) -> Logger:
    """Create a logger like ``new_logger`` and exit when that fails."""
    try:
        return new_logger(config, writer=writer, **overrides)
    except LoggerConfigurationError as exc:
        raise SystemExit(f"could not create logger: {exc.message}") from exc


def new_nop_logger() -> Logger:
    """Create a logger that writes nothing.

    Useful as a placeholder where a logger is required but no output is
    wanted. Fatal methods still exit and panic methods still raise.
    """
    backend = structlog.wrap_logger(
        NopWriter(), processors=[], wrapper_class=FieldBoundLogger, context_class=dict
    ).bind()
    return Logger(backend, level=None)


def _handle_uninitialized(logger: Logger | None) -> None:
    if logger is not None and logger._backend is not None:
        return

    emergency = build_backend(LogConfig.model_construct(stacktrace_level=LogLevel.PANIC))
    error = LoggerNotInitializedError()
    emergency.emit(LogLevel.PANIC.value, error.message, {})
    raise error
