"""Global pytest configuration and fixtures."""
import io
import json
import os

import pytest

from piilog import default as default_module
from piilog.pii import set_mask_func
from piilog.writer import LevelRoutingWriter


class CapturingWriter(LevelRoutingWriter):
    """Level routing writer on in-memory streams."""

    def __init__(self):
        super().__init__(out=io.StringIO(), err=io.StringIO())

    def records(self, stream: str = "all") -> list[dict]:
        """Parse the JSON records written to ``out``, ``err`` or both."""
        lines = []
        if stream in ("out", "all"):
            lines.extend(self.out.getvalue().splitlines())
        if stream in ("err", "all"):
            lines.extend(self.err.getvalue().splitlines())
        return [json.loads(line) for line in lines if line]


class BrokenStream(io.StringIO):
    """Stream whose flush always fails."""

    def flush(self):
        raise OSError("disk full")


@pytest.fixture(autouse=True)
def clean_log_env(monkeypatch):
    """Keep LOG_ variables of the test environment out of configurations."""
    for key in list(os.environ):
        if key.upper().startswith("LOG_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def reset_mask_func():
    """Uninstall the mask function around every test."""
    set_mask_func(None)
    yield
    set_mask_func(None)


@pytest.fixture
def writer() -> CapturingWriter:
    return CapturingWriter()


@pytest.fixture
def broken_stream() -> BrokenStream:
    return BrokenStream()


@pytest.fixture
def restore_default_logger():
    """Put the package-level logger back after the test."""
    original = default_module._logger
    yield
    default_module.set_logger(original)
