"""FailureCapture: scoped collection of assertion failures.

Bridges assertion-style predicates (fail by raising, succeed by returning)
into boolean matchers.

Exception Algebra:
  - recognized failure (failure_types), probe:  captured as text -> False
  - recognized failure (failure_types), commit: propagates unchanged
  - other Exception, both modes:                 UnexpectedMatcherError
  - other BaseException, both modes:             propagates unchanged
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from seqcheck.domain.exceptions import SeqCheckError, UnexpectedMatcherError

if TYPE_CHECKING:
    from collections.abc import Callable

_T = TypeVar("_T")


def failure_text(exc: BaseException) -> str:
    """Human-readable text of a captured failure.

    Bare `assert` statements raise AssertionError without a message,
    so fall back to the exception type name.
    """
    text = str(exc).strip()
    return text or type(exc).__name__


class FailureCapture:
    """Collects recognized assertion failures without raising them.

    One instance per verification. Captured text is kept until discard(),
    so the caller decides which attempt's failures end up in diagnostics.
    """

    __slots__ = ("_failure_types", "_messages")

    def __init__(self, failure_types: tuple[type[BaseException], ...]) -> None:
        """Initialize with recognized failure types.

        Args:
            failure_types: Exception types a matcher raises to signal a mismatch.

        Raises:
            ValueError: failure_types is empty.
        """
        if not failure_types:
            raise ValueError("failure_types must not be empty")
        self._failure_types = failure_types
        self._messages: list[str] = []

    @property
    def failure_types(self) -> tuple[type[BaseException], ...]:
        """Recognized failure types."""
        return self._failure_types

    @property
    def messages(self) -> tuple[str, ...]:
        """Captured failure texts, oldest first."""
        return tuple(self._messages)

    @property
    def last_failure(self) -> str | None:
        """Newest captured failure text, None if nothing captured."""
        return self._messages[-1] if self._messages else None

    def is_failure(self, exc: BaseException) -> bool:
        """Check if exception is a recognized assertion failure."""
        return isinstance(exc, self._failure_types)

    def discard(self) -> None:
        """Drop all captured text."""
        self._messages.clear()

    def probe(self, assertion: Callable[[_T], object], value: _T) -> bool:
        """Run assertion with failure capture enabled.

        Returns:
            True if assertion returned normally, False if it raised a
            recognized failure (text captured).

        Raises:
            UnexpectedMatcherError: Assertion raised an unrecognized Exception.
        """
        try:
            assertion(value)
        except self._failure_types as exc:
            self._messages.append(failure_text(exc))
            return False
        except SeqCheckError:
            raise
        except Exception as exc:
            raise UnexpectedMatcherError(exc) from exc
        return True

    def commit(self, assertion: Callable[[_T], object], value: _T) -> bool:
        """Run assertion with failure capture disabled.

        Returns:
            True if assertion returned normally.

        Raises:
            failure_types: Assertion failed, propagated unchanged.
            UnexpectedMatcherError: Assertion raised an unrecognized Exception.
        """
        try:
            assertion(value)
        except self._failure_types:
            raise
        except SeqCheckError:
            raise
        except Exception as exc:
            raise UnexpectedMatcherError(exc) from exc
        return True
