"""Domain exceptions: all public errors of seqcheck.

Hexagonal architecture: all exceptions visible to users defined in domain.
Application/Infrastructure raise these, they do not define their own public exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seqcheck.domain.model.call import Call
    from seqcheck.domain.model.call_specification import CallSpecification


class SeqCheckError(Exception):
    """Base for all seqcheck error exceptions.

    Allows: except SeqCheckError to catch all library errors.
    """


class NotRecordingError(SeqCheckError, RuntimeError):
    """Expectation registered while no query is being recorded.

    Inherits RuntimeError for semantic correctness (invalid state).
    """

    def __init__(self) -> None:
        """Initialize with fixed message."""
        super().__init__("Not currently recording a query")


class NestedQueryError(SeqCheckError, RuntimeError):
    """Exclusive query scope requested while another one is active."""

    def __init__(self) -> None:
        """Initialize with fixed message."""
        super().__init__("Cannot run nested queries")


class EmptyQueryError(SeqCheckError, RuntimeError):
    """Declaring callback registered no expected calls.

    Usually the substitutes are bound to a different QueryContext than the
    one verifying, so the callback recorded real calls instead of declaring.
    """

    def __init__(self) -> None:
        """Initialize with fixed message."""
        super().__init__(
            "No expected calls declared. Are the substitutes bound to the QueryContext passed for verification?",
        )


class QueryFinalizedError(SeqCheckError, RuntimeError):
    """Specification added to a query whose scope already exited."""

    def __init__(self) -> None:
        """Initialize with fixed message."""
        super().__init__("Query already finalized, cannot add specifications")


class QueryNotFinalizedError(SeqCheckError, RuntimeError):
    """Verification requested before the query scope exited."""

    def __init__(self) -> None:
        """Initialize with fixed message."""
        super().__init__("Query scope not exited, cannot verify")


class SequenceNotFoundError(SeqCheckError, AssertionError):
    """Received calls do not satisfy the expected sequence.

    Inherits AssertionError so test runners report it as a test failure,
    not as an error.

    Attributes:
        expected: Full expected sequence (registration order).
        actual: Calls the specification was compared against.
        mismatch_index: Position of the first failing specification (exact
            mode) or None.
        unmatched: Specification without a matching call (any-order mode)
            or None.
        failure_message: Text of the structured failure raised by a matcher,
            None for plain mismatches.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: tuple[CallSpecification, ...],
        actual: tuple[Call, ...],
        mismatch_index: int | None = None,
        unmatched: CallSpecification | None = None,
        failure_message: str | None = None,
    ) -> None:
        """Initialize with rendered message and the compared sequences."""
        if not message:
            raise ValueError("message must not be empty")

        self.expected = expected
        self.actual = actual
        self.mismatch_index = mismatch_index
        self.unmatched = unmatched
        self.failure_message = failure_message
        super().__init__(message)


class UnexpectedMatcherError(SeqCheckError):
    """Matcher raised something other than a recognized assertion failure.

    Not a non-match: propagates in both probe and commit mode.
    Preserves original traceback via __cause__.

    Attributes:
        original: Original exception from the matcher.
    """

    def __init__(self, original: BaseException) -> None:
        """Initialize with original exception."""
        self.original = original
        super().__init__(f"Matcher raised: {type(original).__name__}: {original}")
        self.__cause__ = original


class InvalidMatcherError(SeqCheckError, TypeError):
    """Assertion passed to match() is not callable.

    Attributes:
        got: Actual type received.
    """

    def __init__(self, got: type) -> None:
        """Initialize with actual type."""
        self.got = got
        super().__init__(f"assertion must be callable, got {got.__name__}")


class AsyncCallbackError(SeqCheckError, TypeError):
    """Synchronous scope runner received an awaitable.

    Use the suspend-aware variant (arun_in_scope) instead.
    """

    def __init__(self) -> None:
        """Initialize with fixed message."""
        super().__init__("callback returned an awaitable, use arun_in_scope()")


class UnknownMemberError(SeqCheckError, AttributeError):
    """Substitute spec has no such member.

    Attributes:
        spec_name: Name of the spec type.
        member: Requested member name.
    """

    def __init__(self, spec_name: str, member: str) -> None:
        """Initialize with spec name and missing member."""
        self.spec_name = spec_name
        self.member = member
        super().__init__(f"{spec_name} has no member {member!r}")
