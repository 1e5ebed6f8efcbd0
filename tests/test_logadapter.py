"""
Tests for the structured logging adapter.
"""

import logging

import pytest

from mpg.logadapter import TRACE, LoggingSink, SinkHandler, StructuredLogger


class RecordingSink:
    def __init__(self):
        self.records = []

    def trace(self, message, fields):
        self.records.append(("trace", message, dict(fields)))

    def debug(self, message, fields):
        self.records.append(("debug", message, dict(fields)))

    def info(self, message, fields):
        self.records.append(("info", message, dict(fields)))

    def warn(self, message, fields):
        self.records.append(("warn", message, dict(fields)))

    def error(self, message, fields):
        self.records.append(("error", message, dict(fields)))


class TestStructuredLogger:
    """Test attribute and group handling of StructuredLogger."""

    def setup_method(self):
        """Setup a logger writing into a recording sink."""
        self.sink = RecordingSink()
        self.logger = StructuredLogger(self.sink)

    @pytest.mark.parametrize(
        "level,expected",
        [
            (TRACE, "trace"),
            (logging.DEBUG, "debug"),
            (logging.INFO, "info"),
            (logging.WARNING, "warn"),
            (logging.ERROR, "error"),
            (42, "trace"),
        ],
    )
    def test_level_dispatch(self, level, expected):
        """Test each level reaches the matching sink method, unknown levels go to trace."""
        self.logger.log(level, "hello")

        assert self.sink.records == [(expected, "hello", {})]

    def test_shortcuts(self):
        """Test the per-level shortcut methods."""
        self.logger.trace("a")
        self.logger.debug("b")
        self.logger.info("c")
        self.logger.warn("d")
        self.logger.error("e")

        assert [level for level, _, _ in self.sink.records] == ["trace", "debug", "info", "warn", "error"]

    def test_attributes_accumulate(self):
        """Test attributes from chained with_attrs calls and the record are merged."""
        logger = self.logger.with_attrs(project="p-123").with_attrs(database="mysql_abc")

        logger.info("created", version="8.0")

        assert self.sink.records == [
            ("info", "created", {"project": "p-123", "database": "mysql_abc", "version": "8.0"})
        ]

    def test_groups_prefix_later_attributes_only(self):
        """Test a group only prefixes attributes added after it was opened."""
        logger = self.logger.with_attrs(project="p-123").with_group("db").with_attrs(name="main")

        logger.info("created", version="8.0")

        assert self.sink.records[0][2] == {"project": "p-123", "db.name": "main", "db.version": "8.0"}

    def test_nested_groups(self):
        """Test nested groups are joined with dots."""
        self.logger.with_group("db").with_group("user").debug("created", name="app")

        assert self.sink.records[0][2] == {"db.user.name": "app"}

    def test_empty_group_is_noop(self):
        """Test an empty group name returns the same logger."""
        assert self.logger.with_group("") is self.logger

    def test_derived_loggers_do_not_affect_parent(self):
        """Test derived loggers leave the parent untouched."""
        self.logger.with_attrs(a=1).with_group("g")

        self.logger.info("plain")

        assert self.sink.records == [("info", "plain", {})]

    def test_record_attributes_override(self):
        """Test record attributes win over logger attributes with the same key."""
        self.logger.with_attrs(state="pending").info("ready", state="ready")

        assert self.sink.records[0][2] == {"state": "ready"}

    def test_reserved_names_are_plain_attributes(self):
        """Test message, level and self can be used as attribute keys."""
        self.logger.error("request failed", message="upstream said no")
        self.logger.log(logging.INFO, "x", level="debug")
        self.logger.with_attrs(self="me").with_group("g").warn("y", message="m", level="l")

        assert self.sink.records == [
            ("error", "request failed", {"message": "upstream said no"}),
            ("info", "x", {"level": "debug"}),
            ("warn", "y", {"self": "me", "g.message": "m", "g.level": "l"}),
        ]


class TestSinkHandler:
    """Test routing of standard library records into a sink."""

    def setup_method(self):
        """Setup an isolated logger with a SinkHandler attached."""
        self.sink = RecordingSink()
        self.logger = logging.getLogger("mpg.tests.sink_handler")
        self.logger.setLevel(TRACE)
        self.logger.propagate = False
        self.handler = SinkHandler(self.sink)
        self.logger.addHandler(self.handler)

    def teardown_method(self):
        """Detach the handler again."""
        self.logger.removeHandler(self.handler)

    def test_forwards_records_with_fields(self):
        """Test the formatted message and extra fields are forwarded."""
        self.logger.warning("slow %s", "response", extra={"fields": {"duration": 3}})

        assert self.sink.records == [
            ("warn", "slow response", {"duration": 3, "logger": "mpg.tests.sink_handler"}),
        ]

    def test_level_mapping(self):
        """Test standard levels map onto sink levels, CRITICAL becomes error."""
        self.logger.log(TRACE, "t")
        self.logger.debug("d")
        self.logger.info("i")
        self.logger.critical("c")

        assert [level for level, _, _ in self.sink.records] == ["trace", "debug", "info", "error"]


class TestLoggingSink:
    """Test the sink that writes into a standard library logger."""

    def test_writes_to_logger(self, caplog):
        """Test fields are rendered into the message and kept on the record."""
        sink = LoggingSink(logging.getLogger("mpg.tests.logging_sink"))

        with caplog.at_level(logging.DEBUG, logger="mpg.tests.logging_sink"):
            StructuredLogger(sink).with_group("db").info("created", name="main")

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.INFO
        assert record.getMessage() == "created db.name='main'"
        assert record.fields == {"db.name": "main"}

    def test_skips_disabled_levels(self, caplog):
        """Test records below the logger level are dropped."""
        sink = LoggingSink(logging.getLogger("mpg.tests.logging_sink_quiet"))

        with caplog.at_level(logging.INFO, logger="mpg.tests.logging_sink_quiet"):
            sink.trace("hidden", {})
            sink.debug("hidden", {})

        assert caplog.records == []
