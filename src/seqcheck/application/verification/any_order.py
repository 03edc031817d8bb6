"""Any-order verification.

Specifications are grouped per target (identity). Within a group they are
processed in registration order; each takes the first remaining call that
fully matches in PROBE mode and consumes it. Targets are independent.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from seqcheck.application.verification.exact import distinct_targets
from seqcheck.application.verification.formatter import SequenceFormatter, any_order_message
from seqcheck.domain.capture import FailureCapture
from seqcheck.domain.exceptions import SequenceNotFoundError
from seqcheck.domain.model.enums import MatchMode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from seqcheck.domain.model.call import Call
    from seqcheck.domain.model.call_specification import CallSpecification
    from seqcheck.domain.model.configuration import VerificationConfig

logger = logging.getLogger(__name__)


def group_by_target(
    specifications: Sequence[CallSpecification],
) -> list[tuple[object, list[CallSpecification]]]:
    """Group specifications by target identity, keeping relative order."""
    groups: dict[int, tuple[object, list[CallSpecification]]] = {}
    for spec in specifications:
        groups.setdefault(id(spec.target), (spec.target, []))[1].append(spec)
    return list(groups.values())


def _take_first_match(
    spec: CallSpecification,
    pool: list[Call],
    capture: FailureCapture,
) -> tuple[Call | None, str | None]:
    """Remove and return first call in pool matching spec.

    Failure text of a rejected candidate is discarded before the next one
    is probed. Only the text of the last candidate rejected by a matcher
    failure is returned; structural rejections carry no text.

    Returns:
        (matched call or None, failure text of last matcher-rejected candidate)
    """
    last_failure: str | None = None
    for index, call in enumerate(pool):
        capture.discard()
        if spec.is_satisfied_by(call, capture, MatchMode.PROBE):
            capture.discard()
            return pool.pop(index), None
        if capture.last_failure is not None:
            last_failure = capture.last_failure
    capture.discard()
    return None, last_failure


def verify_any_order(
    specifications: Sequence[CallSpecification],
    config: VerificationConfig,
) -> None:
    """Verify each specification is satisfied by a distinct received call.

    Args:
        specifications: Expected calls (registration order).
        config: Failure types and diagnostics settings.

    Raises:
        SequenceNotFoundError: A specification has no remaining matching call.
        UnexpectedMatcherError: A matcher raised an unrecognized exception.
    """
    specs = tuple(specifications)
    capture = FailureCapture(config.failure_types)

    for target, group in group_by_target(specs):
        pool: list[Call] = list(target.received_calls())  # type: ignore[attr-defined]

        for spec in group:
            matched, failure_message = _take_first_match(spec, pool, capture)
            if matched is not None:
                continue

            remaining = tuple(pool)
            formatter = SequenceFormatter(specs, remaining, config.max_argument_length)
            raise SequenceNotFoundError(
                any_order_message(formatter, spec, remaining, failure_message),
                expected=specs,
                actual=remaining,
                unmatched=spec,
                failure_message=failure_message,
            )

    logger.debug(
        "any order verified: %d specification(s) on %d target(s)",
        len(specs),
        len(distinct_targets(specs)),
    )
