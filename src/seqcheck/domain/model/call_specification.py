"""Expected call value objects."""

from __future__ import annotations

import types
import typing
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Union

from seqcheck.domain.model.enums import MatchMode

if TYPE_CHECKING:
    from seqcheck.domain.capture import FailureCapture
    from seqcheck.domain.model.call import Call
    from seqcheck.domain.ports.matcher import ArgumentMatcher


def is_compatible(value: object, expected: object | None) -> bool:
    """Check if value may be passed where `expected` is declared.

    None/Any accept everything. Unions accept any member.
    Parametrised generics are checked against their origin class only.
    Anything that is not a class (TypeVar, Protocol without
    runtime_checkable, string annotations) is not enforced.
    """
    if expected is None or expected is Any:
        return True
    if expected is type(None):
        return value is None

    origin = typing.get_origin(expected)
    if origin is Union or origin is types.UnionType:
        return any(is_compatible(value, member) for member in typing.get_args(expected))
    if origin is typing.Literal:
        return value in typing.get_args(expected)

    cls = origin if origin is not None else expected
    if not isinstance(cls, type):
        return True
    try:
        return isinstance(value, cls)
    except TypeError:
        # Non-runtime-checkable Protocol
        return True


@dataclass(frozen=True, slots=True)
class ArgumentSpecification:
    """Matcher for one parameter plus the parameter's declared type.

    The declared type is enforced before the matcher runs: an argument of
    the wrong type is a non-match, the matcher is never invoked.

    Attributes:
        matcher: Matcher for the argument value
        for_type: Declared parameter type. None = not declared
    """

    matcher: ArgumentMatcher
    for_type: object | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.matcher is None:
            raise TypeError("matcher must not be None")

    def is_compatible(self, value: object) -> bool:
        """Check declared parameter type and matcher type."""
        return is_compatible(value, self.for_type) and is_compatible(value, self.matcher.for_type)

    def is_satisfied_by(self, value: object, capture: FailureCapture, mode: MatchMode) -> bool:
        """Match argument in given mode.

        Raises:
            failure_types: COMMIT mode, matcher failed.
            UnexpectedMatcherError: Matcher raised an unrecognized exception.
        """
        if not self.is_compatible(value):
            return False

        match mode:
            case MatchMode.PROBE:
                return self.matcher.try_match(value, capture)
            case MatchMode.COMMIT:
                return self.matcher.assert_match(value, capture)

    def describe(self) -> str:
        """Matcher description for diagnostics."""
        return self.matcher.describe()


@dataclass(frozen=True, slots=True, eq=False)
class CallSpecification:
    """One expected call: target, member and per-argument specifications.

    Built once while recording, never mutated. Does not own any Call.

    Attributes:
        target: Target the call is expected on (compared by identity)
        method: Expected member name
        args: Specifications for positional arguments
        kwargs: Specifications for keyword arguments (read-only view)
    """

    target: object
    method: str
    args: tuple[ArgumentSpecification, ...] = ()
    kwargs: Mapping[str, ArgumentSpecification] = field(
        default_factory=lambda: MappingProxyType({}),
    )

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.target is None:
            raise TypeError("target must not be None")
        if not self.method:
            raise ValueError("method must not be empty")
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))
        if not isinstance(self.kwargs, MappingProxyType):
            object.__setattr__(self, "kwargs", MappingProxyType(dict(self.kwargs)))

    def is_satisfied_by(self, call: Call, capture: FailureCapture, mode: MatchMode) -> bool:
        """Check if call fulfils this specification.

        Cheap structural checks (target identity, member, arity, keyword
        names) run first, matchers only afterwards.

        Raises:
            failure_types: COMMIT mode, a matcher failed.
            UnexpectedMatcherError: A matcher raised an unrecognized exception.
        """
        if call.target is not self.target:
            return False
        if call.method != self.method:
            return False
        if len(call.args) != len(self.args):
            return False
        if call.kwargs.keys() != self.kwargs.keys():
            return False

        for spec, value in zip(self.args, call.args, strict=True):
            if not spec.is_satisfied_by(value, capture, mode):
                return False
        for name, spec in self.kwargs.items():
            if not spec.is_satisfied_by(call.kwargs[name], capture, mode):
                return False
        return True
