"""Reporting of drained test results."""

from runwright.report.generator import ReportGenerator
from runwright.report.terminal import TerminalReporter

__all__ = ["ReportGenerator", "TerminalReporter"]
