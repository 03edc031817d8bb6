"""pytest plugin for seqcheck.

Provides fixtures for call-order verification:
    seqcheck_config: VerificationConfig from ini options (session)
    seqcheck_context: Fresh QueryContext per test
    substitute: Substitute factory bound to seqcheck_context

Configuration (pytest.ini or pyproject.toml):
    seqcheck_length_policy: "prefix" (default) or "strict"
    seqcheck_max_argument_length: Truncate argument reprs (default: unlimited)
    seqcheck_report: Attach rich sequence report to failures (default: true)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from seqcheck.application.reporters.console import ConsoleConfig, ConsoleReporter
from seqcheck.domain.exceptions import SequenceNotFoundError

# Register fixtures from fixtures module
from seqcheck.presentation.pytest_plugin.fixtures import (
    build_config,
    seqcheck_config,
    seqcheck_context,
    substitute,
)

if TYPE_CHECKING:
    from collections.abc import Generator

# Export fixtures for pytest discovery
__all__ = [
    "seqcheck_config",
    "seqcheck_context",
    "substitute",
]

REPORT_SECTION = "seqcheck"


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register ini options."""
    parser.addini(
        "seqcheck_length_policy",
        "Exact-order policy for surplus received calls: prefix or strict",
        default="prefix",
    )
    parser.addini(
        "seqcheck_max_argument_length",
        "Truncate argument reprs in sequence diagnostics",
        default="",
    )
    parser.addini(
        "seqcheck_report",
        "Attach a sequence report section to SequenceNotFoundError failures",
        type="bool",
        default=True,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest plugin with markers."""
    config.addinivalue_line(
        "markers",
        "seqcheck: mark test as call-order verification test",
    )


@pytest.hookimpl(wrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item,
    call: pytest.CallInfo[None],
) -> Generator[None, pytest.TestReport, pytest.TestReport]:
    """Attach a rich report section when a test fails on a call sequence."""
    report = yield
    if call.excinfo is None or not report.failed:
        return report

    error = call.excinfo.value
    if isinstance(error, SequenceNotFoundError) and item.config.getini("seqcheck_report"):
        max_length = build_config(item.config).max_argument_length
        reporter = ConsoleReporter(ConsoleConfig(force_terminal=False, max_argument_length=max_length))
        report.sections.append((REPORT_SECTION, reporter.report(error)))
    return report
