"""Built-in argument matchers.

AssertionMatcher bridges assertion-style predicates into the two-mode
matcher contract. EqualityMatcher and AnyMatcher cover plain values and
wildcards with the same interface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from seqcheck.domain.exceptions import InvalidMatcherError, SeqCheckError, UnexpectedMatcherError

if TYPE_CHECKING:
    from collections.abc import Callable

    from seqcheck.domain.capture import FailureCapture
    from seqcheck.domain.ports.matcher import ArgumentMatcher


def _type_name(for_type: object | None) -> str:
    """Readable name of a declared type."""
    if for_type is None:
        return "object"
    return getattr(for_type, "__name__", None) or repr(for_type)


@dataclass(frozen=True, slots=True, eq=False)
class AssertionMatcher:
    """Adapts `assertion(value) -> None` (raises on mismatch) into a matcher.

    Probe mode runs the assertion with failure capture enabled, commit mode
    lets the failure propagate. Same predicate, evaluated twice at most.

    Attributes:
        assertion: User assertion routine
        for_type: Expected argument type. None = any type
    """

    assertion: Callable[[object], object]
    for_type: object | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not callable(self.assertion):
            raise InvalidMatcherError(type(self.assertion))

    def try_match(self, value: object, capture: FailureCapture) -> bool:
        """Probe: recognized failures captured, never raised."""
        return capture.probe(self.assertion, value)

    def assert_match(self, value: object, capture: FailureCapture) -> bool:
        """Commit: recognized failures propagate."""
        return capture.commit(self.assertion, value)

    def describe(self) -> str:
        """Format as match(<assertion name>: <type>)."""
        name = getattr(self.assertion, "__qualname__", None) or repr(self.assertion)
        return f"match({name}: {_type_name(self.for_type)})"


@dataclass(frozen=True, slots=True, eq=False)
class EqualityMatcher:
    """Matches arguments equal to `expected`.

    Plain mismatch returns False in both modes. An exception raised by
    __eq__ (e.g. ambiguous truth value) is an unexpected error, not a mismatch.

    Attributes:
        expected: Value the argument must equal
        for_type: Always None, equality accepts any type
    """

    expected: object
    for_type: object | None = field(default=None, init=False)

    def _equals(self, value: object) -> bool:
        try:
            return bool(value == self.expected)
        except SeqCheckError:
            raise
        except Exception as exc:
            raise UnexpectedMatcherError(exc) from exc

    def try_match(self, value: object, capture: FailureCapture) -> bool:
        """Probe: compare with ==."""
        del capture  # Nothing to capture
        return self._equals(value)

    def assert_match(self, value: object, capture: FailureCapture) -> bool:
        """Commit: compare with ==."""
        del capture  # Nothing to capture
        return self._equals(value)

    def describe(self) -> str:
        """Format as repr of expected value."""
        return repr(self.expected)


@dataclass(frozen=True, slots=True)
class AnyMatcher:
    """Matches any argument compatible with `for_type`.

    Attributes:
        for_type: Expected argument type. None = any type
    """

    for_type: object | None = None

    def try_match(self, value: object, capture: FailureCapture) -> bool:
        """Always matches (type checked by ArgumentSpecification)."""
        del value, capture
        return True

    def assert_match(self, value: object, capture: FailureCapture) -> bool:
        """Always matches (type checked by ArgumentSpecification)."""
        del value, capture
        return True

    def describe(self) -> str:
        """Format as ANY or any(<type>)."""
        if self.for_type is None:
            return "ANY"
        return f"any({_type_name(self.for_type)})"


ANY = AnyMatcher()

MATCHER_TYPES = (AssertionMatcher, EqualityMatcher, AnyMatcher)


def as_matcher(value: object) -> ArgumentMatcher:
    """Use value as-is if it is a matcher placeholder, else match by equality."""
    if isinstance(value, MATCHER_TYPES):
        return value
    return EqualityMatcher(value)
