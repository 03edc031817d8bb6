"""Argument matcher protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from seqcheck.domain.capture import FailureCapture


class ArgumentMatcher(Protocol):
    """Contract for per-argument matchers.

    Two evaluation modes over one underlying predicate:
    - try_match: probe, never raises a recognized failure
    - assert_match: commit, recognized failures propagate to the caller

    Built-in matchers are NOT special - same interface, same status.
    """

    @property
    def for_type(self) -> object | None:
        """Type the argument must be compatible with. None = any type."""
        ...

    def try_match(self, value: object, capture: FailureCapture) -> bool:
        """Evaluate silently.

        Args:
            value: Actual argument value.
            capture: Collects text of recognized failures.

        Returns:
            True if the value matches.

        Raises:
            UnexpectedMatcherError: Matcher raised an unrecognized exception.
        """
        ...

    def assert_match(self, value: object, capture: FailureCapture) -> bool:
        """Evaluate and let recognized failures propagate.

        Args:
            value: Actual argument value.
            capture: Decides which failures are recognized.

        Returns:
            True if the value matches, False for a plain (non-raising) mismatch.

        Raises:
            UnexpectedMatcherError: Matcher raised an unrecognized exception.
        """
        ...

    def describe(self) -> str:
        """Short description used in diagnostics."""
        ...
