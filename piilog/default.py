"""Package-level logger.

The functions of this module write through a process-wide default logger.
It is created at import with the debug level and defaults for everything
else. It does not read the LOG_ environment variables, so importing the
package never fails on them. Replace it with ``set_logger``.
"""

from typing import Any

from .config import LogConfig, LogLevel
from .logger import Logger, _handle_uninitialized, new_logger

_logger: Logger | None = new_logger(LogConfig.model_construct(level=LogLevel.DEBUG))


def set_logger(logger: Logger | None) -> None:
    """Replace the default logger."""
    global _logger
    _logger = logger


def get_logger(name: str | None = None) -> Logger:
    """Get the default logger.

    Args:
    ----
        name: Logger name. If given, records carry it in the name field.

    Returns:
    -------
        The default logger, named if a name was given

    """
    logger = _current()
    if name:
        return logger.named(name)
    return logger


def _current() -> Logger:
    _handle_uninitialized(_logger)
    return _logger  # type: ignore[return-value]


def debug(*args: Any) -> None:
    """Log all operands on the debug level."""
    _current().debug(*args)


def debugf(template: str, *args: Any) -> None:
    """Format and log the operands on the debug level."""
    _current().debugf(template, *args)


def debugw(msg: str, *key_value_pairs: Any) -> None:
    """Log a message and fields on the debug level."""
    _current().debugw(msg, *key_value_pairs)


def info(*args: Any) -> None:
    """Log all operands on the info level."""
    _current().info(*args)


def infof(template: str, *args: Any) -> None:
    """Format and log the operands on the info level."""
    _current().infof(template, *args)


def infow(msg: str, *key_value_pairs: Any) -> None:
    """Log a message and fields on the info level."""
    _current().infow(msg, *key_value_pairs)


def warn(*args: Any) -> None:
    """Log all operands on the warn level."""
    _current().warn(*args)


def warnf(template: str, *args: Any) -> None:
    """Format and log the operands on the warn level."""
    _current().warnf(template, *args)


def warnw(msg: str, *key_value_pairs: Any) -> None:
    """Log a message and fields on the warn level."""
    _current().warnw(msg, *key_value_pairs)


def error(*args: Any) -> None:
    """Log all operands on the error level."""
    _current().error(*args)


def errorf(template: str, *args: Any) -> None:
    """Format and log the operands on the error level."""
    _current().errorf(template, *args)


def errorw(msg: str, *key_value_pairs: Any) -> None:
    """Log a message and fields on the error level."""
    _current().errorw(msg, *key_value_pairs)


def fatal(*args: Any) -> None:
    """Log all operands on the fatal level and exit with status 1."""
    _current().fatal(*args)


def fatalf(template: str, *args: Any) -> None:
    """Format and log the operands on the fatal level and exit with status 1."""
    _current().fatalf(template, *args)


def fatalw(msg: str, *key_value_pairs: Any) -> None:
    """Log a message and fields on the fatal level and exit with status 1."""
    _current().fatalw(msg, *key_value_pairs)


def sync() -> None:
    """Flush the default logger."""
    _current().sync()
