"""Reporters for sequence mismatches.

Output is str, not print(). Users can implement custom reporters
with the same ReporterProtocol.
"""

from seqcheck.application.reporters.console import ConsoleConfig, ConsoleReporter
from seqcheck.application.reporters.protocol import ReporterProtocol

__all__ = [
    "ConsoleConfig",
    "ConsoleReporter",
    "ReporterProtocol",
]
