"""
Structured logging adapter for the plugin log sink.

Terraform collects provider logs through a leveled sink that accepts a message
plus a flat mapping of fields. ``StructuredLogger`` accumulates attributes and
groups in the style of key/value loggers and flattens them into dotted keys
before a record reaches the sink. ``SinkHandler`` routes records emitted through
the standard ``logging`` module into the same sink.
"""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class LogSink(Protocol):
    def trace(self, message: str, fields: Mapping[str, Any]) -> None: ...

    def debug(self, message: str, fields: Mapping[str, Any]) -> None: ...

    def info(self, message: str, fields: Mapping[str, Any]) -> None: ...

    def warn(self, message: str, fields: Mapping[str, Any]) -> None: ...

    def error(self, message: str, fields: Mapping[str, Any]) -> None: ...


class LoggingSink:
    """Sink that writes into a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("mpg.plugin")

    def _log(self, level: int, message: str, fields: Mapping[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        if fields:
            rendered = " ".join(f"{key}={value!r}" for key, value in sorted(fields.items()))
            message = f"{message} {rendered}"
        self.logger.log(level, message, extra={"fields": dict(fields)})

    def trace(self, message: str, fields: Mapping[str, Any]) -> None:
        self._log(TRACE, message, fields)

    def debug(self, message: str, fields: Mapping[str, Any]) -> None:
        self._log(logging.DEBUG, message, fields)

    def info(self, message: str, fields: Mapping[str, Any]) -> None:
        self._log(logging.INFO, message, fields)

    def warn(self, message: str, fields: Mapping[str, Any]) -> None:
        self._log(logging.WARNING, message, fields)

    def error(self, message: str, fields: Mapping[str, Any]) -> None:
        self._log(logging.ERROR, message, fields)


def dispatch(sink: LogSink, level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a record to the sink method matching its level; anything unrecognised goes to trace."""
    if level == logging.DEBUG:
        sink.debug(message, fields)
    elif level == logging.INFO:
        sink.info(message, fields)
    elif level == logging.WARNING:
        sink.warn(message, fields)
    elif level == logging.ERROR:
        sink.error(message, fields)
    else:
        sink.trace(message, fields)


def _qualify(groups: tuple[str, ...], key: str) -> str:
    return ".".join((*groups, key))


class StructuredLogger:
    """
    Immutable logger that accumulates attributes and groups.

    Attributes added with ``with_attrs`` keep the group path that was active when
    they were added, so ``logger.with_attrs(a=1).with_group("db").info("x", b=2)``
    sends ``{"a": 1, "db.b": 2}``. Later attributes override earlier ones with the
    same qualified key.
    """

    def __init__(
        self,
        sink: LogSink,
        attrs: tuple[tuple[str, Any], ...] = (),
        groups: tuple[str, ...] = (),
    ):
        self.sink = sink
        self._attrs = attrs
        self._groups = groups

    def with_attrs(self, /, **attrs: Any) -> "StructuredLogger":
        if not attrs:
            return self
        qualified = tuple((_qualify(self._groups, key), value) for key, value in attrs.items())
        return StructuredLogger(self.sink, self._attrs + qualified, self._groups)

    def with_group(self, name: str) -> "StructuredLogger":
        if not name:
            return self
        return StructuredLogger(self.sink, self._attrs, self._groups + (name,))

    def fields(self, /, **attrs: Any) -> dict[str, Any]:
        """Resolve the fields a record with the given attributes would carry."""
        resolved = dict(self._attrs)
        for key, value in attrs.items():
            resolved[_qualify(self._groups, key)] = value
        return resolved

    def log(self, level: int, message: str, /, **attrs: Any) -> None:
        dispatch(self.sink, level, message, self.fields(**attrs))

    def trace(self, message: str, /, **attrs: Any) -> None:
        self.log(TRACE, message, **attrs)

    def debug(self, message: str, /, **attrs: Any) -> None:
        self.log(logging.DEBUG, message, **attrs)

    def info(self, message: str, /, **attrs: Any) -> None:
        self.log(logging.INFO, message, **attrs)

    def warn(self, message: str, /, **attrs: Any) -> None:
        self.log(logging.WARNING, message, **attrs)

    def error(self, message: str, /, **attrs: Any) -> None:
        self.log(logging.ERROR, message, **attrs)


class SinkHandler(logging.Handler):
    """
    Logging handler forwarding standard library records to a plugin sink.

    Fields are taken from ``extra={"fields": {...}}``. Levels between the standard
    ones are rounded down, so CRITICAL is reported as error.
    """

    def __init__(self, sink: LogSink, level: int = logging.NOTSET):
        super().__init__(level)
        self.sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            fields = dict(getattr(record, "fields", None) or {})
            fields.setdefault("logger", record.name)
            if record.levelno >= logging.ERROR:
                level = logging.ERROR
            elif record.levelno >= logging.WARNING:
                level = logging.WARNING
            elif record.levelno >= logging.INFO:
                level = logging.INFO
            elif record.levelno >= logging.DEBUG:
                level = logging.DEBUG
            else:
                level = TRACE
            dispatch(self.sink, level, record.getMessage(), fields)
        except Exception:
            self.handleError(record)
