"""
Structured logging adapter for the plugin log sink.
"""

from .handler import TRACE, LoggingSink, LogSink, SinkHandler, StructuredLogger

__all__ = ["TRACE", "LogSink", "LoggingSink", "SinkHandler", "StructuredLogger"]
