"""Tests for the package-level logger functions."""
import importlib

import pytest

import piilog
from piilog.exceptions import LoggerNotInitializedError
from piilog.logger import Logger, new_logger, new_nop_logger


@pytest.mark.usefixtures("restore_default_logger")
class TestDefaultLogger:
    """Test the process-wide default logger."""

    def test_default_logger_logs_debug(self, capsys):
        """Test that the default logger writes from the debug level."""
        piilog.debugw("starting", "port", 8080)

        out = capsys.readouterr().out
        assert '"lvl": "debug"' in out
        assert '"port": 8080' in out

    def test_functions_use_replaced_logger(self, writer):
        """Test that set_logger redirects every function."""
        piilog.set_logger(new_logger(pii_mode="remove", writer=writer))

        piilog.info("plain")
        piilog.infof("%d formatted", 2)
        piilog.infow("structured", piilog.pii("email", "a@b.com"), "k", "v")
        piilog.warnw("careful")
        piilog.errorf("failed: %s", "x")
        piilog.sync()

        messages = [record["msg"] for record in writer.records()]
        assert messages == ["plain", "2 formatted", "structured", "careful", "failed: x"]
        structured = writer.records("out")[2]
        assert "email" not in structured
        assert structured["k"] == "v"

    def test_caller_is_user_code(self, writer):
        """Test that module functions report the caller, not themselves."""
        piilog.set_logger(new_logger(writer=writer))

        piilog.info("hello")

        [record] = writer.records()
        assert record["func"] == "test_caller_is_user_code"

    def test_get_logger_named(self, writer):
        """Test get_logger with a name."""
        piilog.set_logger(new_logger(writer=writer))

        piilog.get_logger("worker").info("hello")

        [record] = writer.records()
        assert record["name"] == "worker"
        assert piilog.get_logger() is piilog.default._logger

    def test_fatal_exits(self):
        """Test that the module fatal function exits."""
        piilog.set_logger(new_nop_logger())

        with pytest.raises(SystemExit) as exc_info:
            piilog.fatalw("bye", "k", "v")

        assert exc_info.value.code == 1

    def test_unset_logger_fails_loudly(self, capsys):
        """Test the module functions without a default logger."""
        piilog.set_logger(None)

        with pytest.raises(LoggerNotInitializedError):
            piilog.infow("hello")

        assert "logger has not been initialized" in capsys.readouterr().err

    def test_import_ignores_invalid_environment(self, monkeypatch):
        """Test that the default logger builds whatever the LOG_ variables say."""
        monkeypatch.setenv("LOG_FORMAT", "text")
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        module = importlib.reload(piilog.default)

        assert isinstance(module._logger, Logger)
        assert module._logger.level == "debug"
