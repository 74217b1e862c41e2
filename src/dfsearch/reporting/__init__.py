"""
Report sinks. Each one receives the search events through the ReportSink protocol
and renders them in its own format.
"""
from .base import NullReporter
from .text_reporter import TextReporter
from .json_reporter import JsonReporter

__all__ = ["NullReporter", "TextReporter", "JsonReporter"]
