"""Tests for the processor chain and renderers."""
import json
import os

from piilog.config import LogConfig, LogLevel
from piilog.console import RichConsoleRenderer
from piilog.logger import new_logger
from piilog.processors import StacktraceAdder, add_caller, create_processor_chain, order_keys


class TestProcessors:
    """Test the individual processors."""

    def test_add_caller_shortens_path(self):
        """Test that caller keeps the last directory and file name."""
        event = {
            "pathname": os.path.join("srv", "app", "billing", "invoice.py"),
            "lineno": 42,
            "func_name": "send",
        }

        result = add_caller(None, "info", event)

        assert result == {"caller": os.path.join("billing", "invoice.py") + ":42", "func": "send"}

    def test_order_keys(self):
        """Test fixed keys first and stack trace last."""
        event = {"stacktrace": "s", "user": "u", "msg": "m", "lvl": "info", "ts": "t"}

        assert list(order_keys(None, "info", event)) == ["lvl", "ts", "msg", "user", "stacktrace"]

    def test_stacktrace_adder_threshold(self):
        """Test that only levels at or above the threshold get a stack trace."""
        adder = StacktraceAdder(LogLevel.ERROR)

        assert "stacktrace" not in adder(None, "warn", {})
        assert "stacktrace" in adder(None, "error", {})
        assert "stacktrace" in adder(None, "fatal", {})

    def test_stacktrace_adder_ignores_unknown_method(self):
        """Test method names that are not levels."""
        assert StacktraceAdder()(None, "msg", {}) == {}

    def test_chain_ends_with_json_renderer(self):
        """Test the renderer of the json format."""
        chain = create_processor_chain(LogConfig())

        rendered = chain[-1](None, "info", {"msg": "hello"})

        assert json.loads(rendered) == {"msg": "hello"}

    def test_json_renders_unserializable_values(self, writer):
        """Test that values without a JSON form are written as strings."""
        new_logger(writer=writer).infow("hello", "level", LogLevel.WARN, "obj", object())

        [record] = writer.records()
        assert record["level"] == "warn"
        assert record["obj"].startswith("<object object")

    def test_stacktrace_level_from_config(self, writer):
        """Test a configured stack trace threshold."""
        logger = new_logger(stacktrace_level="error", writer=writer)

        logger.warn("w")
        logger.error("e")

        warn_record, error_record = writer.records()
        assert "stacktrace" not in warn_record
        assert "stacktrace" in error_record

    def test_caller_in_module_sharing_package_prefix(self, writer):
        """Test that modules whose name merely starts with the package name are reported."""
        logger = new_logger(writer=writer)
        namespace = {"__name__": "piilog_ext.views", "logger": logger}
        exec(
            compile("def handler():\n    logger.info('hello')\n", "piilog_ext/views.py", "exec"),
            namespace,
        )

        namespace["handler"]()

        [record] = writer.records()
        assert record["func"] == "handler"
        assert record["caller"] == "piilog_ext/views.py:2"


class TestRichConsoleRenderer:
    """Test console output."""

    def test_renders_message_and_fields(self):
        """Test that the message and every field appear."""
        renderer = RichConsoleRenderer()

        output = renderer(
            None,
            "info",
            {"lvl": "info", "ts": "2024-01-01T00:00:00Z", "msg": "hello [world]", "user": "bob"},
        )

        assert "hello [world]" in output
        assert "INFO" in output
        assert "user:" in output
        assert "bob" in output
        assert not output.endswith("\n")

    def test_console_format_logger(self, writer):
        """Test a logger configured for console output."""
        logger = new_logger(format="console", pii_mode="hash", writer=writer)

        logger.warnw("disk almost full", "free_mb", 12)

        err = writer.err.getvalue()
        assert "disk almost full" in err
        assert "free_mb:" in err
        assert "WARN" in err
        assert "test_processors.py" in err
