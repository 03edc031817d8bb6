"""Exact-order verification.

Calls of all targets referenced by the query are merged by global sequence
number (interleaved by time, not grouped by target) and aligned position by
position with the specifications, in COMMIT mode.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from seqcheck.application.verification.formatter import SequenceFormatter, exact_order_message
from seqcheck.domain.capture import FailureCapture, failure_text
from seqcheck.domain.exceptions import SequenceNotFoundError
from seqcheck.domain.model.enums import LengthPolicy, MatchMode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from seqcheck.domain.model.call import Call
    from seqcheck.domain.model.call_specification import CallSpecification
    from seqcheck.domain.model.configuration import VerificationConfig

logger = logging.getLogger(__name__)


def distinct_targets(specifications: Sequence[CallSpecification]) -> tuple[object, ...]:
    """Targets referenced by specifications, deduplicated by identity."""
    seen: dict[int, object] = {}
    for spec in specifications:
        seen.setdefault(id(spec.target), spec.target)
    return tuple(seen.values())


def merged_calls(targets: Sequence[object]) -> tuple[Call, ...]:
    """All received calls of targets, ordered by global sequence number."""
    calls: list[Call] = []
    for target in targets:
        calls.extend(target.received_calls())  # type: ignore[attr-defined]
    return tuple(sorted(calls, key=lambda call: call.sequence_number))


def _length_mismatch(expected: int, actual: int, policy: LengthPolicy) -> int | None:
    """Index of first unaligned position that fails under policy, or None."""
    if actual < expected:
        return actual
    if policy is LengthPolicy.STRICT and actual > expected:
        return expected
    return None


def verify_exact_order(
    specifications: Sequence[CallSpecification],
    config: VerificationConfig,
) -> None:
    """Verify received calls follow specifications as a strict total order.

    Args:
        specifications: Expected sequence (registration order).
        config: Failure types and length policy.

    Raises:
        SequenceNotFoundError: Mismatch, matcher failure or length violation.
        UnexpectedMatcherError: A matcher raised an unrecognized exception.
    """
    specs = tuple(specifications)
    calls = merged_calls(distinct_targets(specs))
    capture = FailureCapture(config.failure_types)

    mismatch_index: int | None = None
    failure_message: str | None = None

    for index, (call, spec) in enumerate(zip(calls, specs, strict=False)):
        try:
            matched = spec.is_satisfied_by(call, capture, MatchMode.COMMIT)
        except config.failure_types as exc:
            # Raised by an assertion matcher: caught exactly once, embedded below
            mismatch_index = index
            failure_message = failure_text(exc)
            break
        if not matched:
            mismatch_index = index
            break

    if mismatch_index is None:
        mismatch_index = _length_mismatch(len(specs), len(calls), config.length_policy)

    if mismatch_index is None:
        logger.debug("exact order verified: %d specification(s)", len(specs))
        return

    formatter = SequenceFormatter(specs, calls, config.max_argument_length)
    raise SequenceNotFoundError(
        exact_order_message(formatter, mismatch_index, failure_message),
        expected=specs,
        actual=calls,
        mismatch_index=mismatch_index,
        failure_message=failure_message,
    )
