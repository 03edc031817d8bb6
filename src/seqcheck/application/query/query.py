"""Query: the expected call sequence recorded in one scope."""

from __future__ import annotations

from typing import TYPE_CHECKING

from seqcheck.application.verification.any_order import verify_any_order
from seqcheck.application.verification.exact import verify_exact_order
from seqcheck.domain.exceptions import QueryFinalizedError, QueryNotFinalizedError
from seqcheck.domain.model.configuration import VerificationConfig

if TYPE_CHECKING:
    from collections.abc import Iterator

    from seqcheck.domain.model.call_specification import CallSpecification


class Query:
    """Ordered CallSpecifications, in registration order.

    Lifecycle:
        created at scope enter -> add() while recording -> finalize() at
        scope exit -> verify_*(). Owned by the scope that created it.
    """

    __slots__ = ("_config", "_finalized", "_specifications")

    def __init__(self, config: VerificationConfig | None = None) -> None:
        """Initialize empty query.

        Args:
            config: Verification configuration. Uses defaults if None.
        """
        self._config = config or VerificationConfig()
        self._specifications: list[CallSpecification] = []
        self._finalized = False

    @property
    def config(self) -> VerificationConfig:
        """Verification configuration."""
        return self._config

    @property
    def is_finalized(self) -> bool:
        """Check if the recording scope has exited."""
        return self._finalized

    @property
    def specifications(self) -> tuple[CallSpecification, ...]:
        """Recorded specifications, registration order."""
        return tuple(self._specifications)

    @property
    def targets(self) -> tuple[object, ...]:
        """Distinct targets (by identity), first appearance order."""
        seen: dict[int, object] = {}
        for spec in self._specifications:
            seen.setdefault(id(spec.target), spec.target)
        return tuple(seen.values())

    def __len__(self) -> int:
        return len(self._specifications)

    def __iter__(self) -> Iterator[CallSpecification]:
        return iter(tuple(self._specifications))

    def add(self, specification: CallSpecification) -> None:
        """Append specification.

        Raises:
            QueryFinalizedError: Scope already exited.
        """
        if self._finalized:
            raise QueryFinalizedError
        self._specifications.append(specification)

    def finalize(self) -> None:
        """Freeze the query. Idempotent."""
        self._finalized = True

    def verify_exact_order(self) -> None:
        """Verify received calls match the query as a strict total order.

        Raises:
            QueryNotFinalizedError: Scope not exited yet.
            SequenceNotFoundError: Calls do not match.
            UnexpectedMatcherError: A matcher raised an unrecognized exception.
        """
        self._ensure_finalized()
        verify_exact_order(self.specifications, self._config)

    def verify_any_order(self) -> None:
        """Verify each specification is matched by a distinct received call.

        Raises:
            QueryNotFinalizedError: Scope not exited yet.
            SequenceNotFoundError: A specification has no matching call.
            UnexpectedMatcherError: A matcher raised an unrecognized exception.
        """
        self._ensure_finalized()
        verify_any_order(self.specifications, self._config)

    def _ensure_finalized(self) -> None:
        """FAIL-FIRST: raise if scope still open."""
        if not self._finalized:
            raise QueryNotFinalizedError

    def __repr__(self) -> str:
        state = "finalized" if self._finalized else "recording"
        return f"<Query {len(self._specifications)} specification(s), {state}>"
