"""Diagnostic text for sequence mismatches.

Targets sharing one label are numbered (1@repo, 2@repo) so interleaved
calls on different instances stay distinguishable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from seqcheck.domain.model.call import Call
    from seqcheck.domain.model.call_specification import CallSpecification

CALL_DELIMITER = "\n    "

PROPERTY_NOTE = "*** Note: calls to property getters are not considered part of the query. ***"

EMPTY_MARKER = "(no calls)"


def truncate(text: str, max_length: int | None) -> str:
    """Shorten text to max_length characters, marking the cut with '...'."""
    if max_length is None or len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


class SequenceFormatter:
    """Renders specifications and calls as one line each.

    Specification: label.method(matcher descriptions)
    Call:          label.method(argument reprs)
    """

    def __init__(
        self,
        specifications: Sequence[CallSpecification],
        calls: Sequence[Call],
        max_argument_length: int | None = None,
    ) -> None:
        """Initialize formatter.

        Args:
            specifications: Expected sequence.
            calls: Actual calls that may appear in the output.
            max_argument_length: Truncate argument reprs. None = unlimited.
        """
        self._specifications = tuple(specifications)
        self._calls = tuple(calls)
        self._max_argument_length = max_argument_length
        self._labels = self._build_labels(
            [spec.target for spec in self._specifications] + [call.target for call in self._calls],
        )

    @staticmethod
    def _build_labels(targets: Iterable[object]) -> dict[int, str]:
        """Map target id -> label, numbering instances that share a label."""
        by_label: dict[str, list[object]] = {}
        for target in targets:
            instances = by_label.setdefault(str(target), [])
            if not any(existing is target for existing in instances):
                instances.append(target)

        labels: dict[int, str] = {}
        for label, instances in by_label.items():
            if len(instances) == 1:
                labels[id(instances[0])] = label
                continue
            for number, target in enumerate(instances, start=1):
                labels[id(target)] = f"{number}@{label}"
        return labels

    def label(self, target: object) -> str:
        """Label of target in this rendering."""
        return self._labels.get(id(target), str(target))

    def format_specification(self, spec: CallSpecification) -> str:
        """Format one specification."""
        parts = [arg.describe() for arg in spec.args]
        parts.extend(f"{name}={arg.describe()}" for name, arg in spec.kwargs.items())
        return f"{self.label(spec.target)}.{spec.method}({', '.join(parts)})"

    def format_call(self, call: Call) -> str:
        """Format one received call."""
        parts = [self._format_argument(value) for value in call.args]
        parts.extend(f"{name}={self._format_argument(value)}" for name, value in call.kwargs.items())
        return f"{self.label(call.target)}.{call.method}({', '.join(parts)})"

    def format_query(self) -> str:
        """All specifications, one per line."""
        return self._join(self.format_specification(spec) for spec in self._specifications)

    def format_actual_calls(self) -> str:
        """All calls, one per line."""
        return self.format_calls(self._calls)

    def format_calls(self, calls: Iterable[Call]) -> str:
        """Given calls, one per line."""
        return self._join(self.format_call(call) for call in calls)

    def _format_argument(self, value: object) -> str:
        return truncate(repr(value), self._max_argument_length)

    @staticmethod
    def _join(lines: Iterable[str]) -> str:
        rendered = list(lines)
        if not rendered:
            return CALL_DELIMITER + EMPTY_MARKER
        return "".join(CALL_DELIMITER + line for line in rendered)


def _failure_section(failure_message: str | None) -> str:
    if failure_message is None:
        return ""
    return f"\n\nAssertion failure:\n{failure_message}"


def exact_order_message(
    formatter: SequenceFormatter,
    mismatch_index: int,
    failure_message: str | None = None,
) -> str:
    """Message for a failed exact-order verification."""
    return (
        f"\nExpected to receive these calls in order:{formatter.format_query()}\n"
        f"\nActually received calls to target instances in this order:"
        f"{formatter.format_actual_calls()}\n"
        f"\nFirst mismatch at position {mismatch_index + 1}.\n"
        f"\n{PROPERTY_NOTE}"
        f"{_failure_section(failure_message)}"
    )


def any_order_message(
    formatter: SequenceFormatter,
    unmatched: CallSpecification,
    remaining: Sequence[Call],
    failure_message: str | None = None,
) -> str:
    """Message for a failed any-order verification."""
    label = formatter.label(unmatched.target)
    return (
        f"\nExpected to receive these calls in any order:{formatter.format_query()}\n"
        f"\nCould not find a match for:"
        f"{CALL_DELIMITER}{formatter.format_specification(unmatched)}\n"
        f"\nRemaining unmatched calls to {label}:{formatter.format_calls(remaining)}\n"
        f"\n{PROPERTY_NOTE}"
        f"{_failure_section(failure_message)}"
    )
