"""Wrapped loggers that put rendered records on their streams."""

import sys
import threading
from typing import Any, TextIO

from .config import LogLevel
from .exceptions import LoggerSyncError


class LevelRoutingWriter:
    """Write rendered records to stdout, or to stderr from ``split_level`` up.

    Streams default to whatever ``sys.stdout`` and ``sys.stderr`` are at
    write time. Writes are serialized so lines of concurrent records never
    interleave.
    """

    def __init__(
        self,
        out: TextIO | None = None,
        err: TextIO | None = None,
        split_level: LogLevel = LogLevel.WARN,
    ) -> None:
        self._out = out
        self._err = err
        self._split_level = split_level
        self._lock = threading.Lock()

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def stream_for(self, level: LogLevel) -> TextIO:
        return self.err if self._split_level.enables(level) else self.out

    def write(self, level: LogLevel, message: str) -> None:
        stream = self.stream_for(level)
        with self._lock:
            stream.write(message + "\n")

    def debug(self, message: str) -> None:
        self.write(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        self.write(LogLevel.INFO, message)

    def warn(self, message: str) -> None:
        self.write(LogLevel.WARN, message)

    def error(self, message: str) -> None:
        self.write(LogLevel.ERROR, message)

    def panic(self, message: str) -> None:
        self.write(LogLevel.PANIC, message)

    def fatal(self, message: str) -> None:
        self.write(LogLevel.FATAL, message)

    def sync(self) -> None:
        """Flush both streams.

        Raises
        ------
            LoggerSyncError: if a stream cannot be flushed

        """
        self._flush(self.out, "stdout")
        self._flush(self.err, "stderr")

    def _flush(self, stream: TextIO, name: str) -> None:
        try:
            with self._lock:
                stream.flush()
        except (OSError, ValueError) as exc:
            raise LoggerSyncError(f"could not sync {name}: {exc}", stream=name) from exc


class NopWriter:
    """Wrapped logger that discards every record."""

    def _discard(self, *args: Any, **kwargs: Any) -> None:
        return None

    debug = info = warn = error = panic = fatal = _discard

    def sync(self) -> None:
        return None
