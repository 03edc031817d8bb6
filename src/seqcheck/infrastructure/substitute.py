"""Substitute: minimal recording double implementing the Target port.

Outside a query scope, member calls are recorded with a global sequence
number. Inside a scope, the same call expression declares an expectation:
a CallSpecification is built from the arguments and routed into the active
query instead of being recorded.

Reserved members (not substitutable): received_calls, clear_received_calls,
configure, and every name starting with an underscore.
"""

from __future__ import annotations

import inspect
import threading
import typing
from dataclasses import dataclass
from typing import TYPE_CHECKING

from seqcheck.application.matching.matchers import as_matcher
from seqcheck.application.query.context import default_context
from seqcheck.domain.exceptions import UnknownMemberError
from seqcheck.domain.model.call import Call
from seqcheck.domain.model.call_specification import ArgumentSpecification, CallSpecification
from seqcheck.infrastructure.sequence import GLOBAL_SEQUENCE

if TYPE_CHECKING:
    from collections.abc import Mapping

    from seqcheck.application.query.context import QueryContext
    from seqcheck.infrastructure.sequence import SequenceNumberGenerator


@dataclass(frozen=True, slots=True)
class _Behaviour:
    """Configured response of one member."""

    returns: object = None
    raises: BaseException | None = None


_DEFAULT_BEHAVIOUR = _Behaviour()


@dataclass(frozen=True, slots=True)
class _Introspection:
    """Signature and resolved annotations of one spec member."""

    signature: inspect.Signature
    hints: Mapping[str, object]


def _declared_types(
    signature: inspect.Signature,
    hints: Mapping[str, object],
    args: tuple[object, ...],
    kwargs: Mapping[str, object],
) -> tuple[tuple[object | None, ...], dict[str, object | None]]:
    """Declared type per positional and keyword argument.

    Raises:
        TypeError: Arguments do not fit the signature.
    """
    signature.bind(*args, **kwargs)

    positional: list[object | None] = []
    var_positional: object | None = None
    keyword: dict[str, object | None] = {}
    var_keyword: object | None = None

    for param in signature.parameters.values():
        hint = hints.get(param.name)
        match param.kind:
            case inspect.Parameter.POSITIONAL_ONLY:
                positional.append(hint)
            case inspect.Parameter.POSITIONAL_OR_KEYWORD:
                positional.append(hint)
                keyword[param.name] = hint
            case inspect.Parameter.VAR_POSITIONAL:
                var_positional = hint
            case inspect.Parameter.KEYWORD_ONLY:
                keyword[param.name] = hint
            case inspect.Parameter.VAR_KEYWORD:
                var_keyword = hint

    arg_types = tuple(
        positional[index] if index < len(positional) else var_positional
        for index in range(len(args))
    )
    kwarg_types = {name: keyword.get(name, var_keyword) for name in kwargs}
    return arg_types, kwarg_types


class _RecordingMethod:
    """Bound member of a Substitute. Calling it records or declares."""

    __slots__ = ("_member", "_owner")

    def __init__(self, owner: Substitute, member: str) -> None:
        self._owner = owner
        self._member = member

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self._owner._invoke(self._member, args, kwargs)  # noqa: SLF001

    def __repr__(self) -> str:
        return f"<recording method {self._owner}.{self._member}>"


class Substitute:
    """Recording double. Implements Target (received_calls()).

    Thread Safety:
      - _lock makes "take sequence number + append" atomic per target,
        so each history is ordered by sequence number

    Example:
        repo = Substitute(Repository)
        service.run(repo)
        received_in_order(lambda: (repo.open(), repo.save(match(is_valid))))
    """

    __slots__ = ("_behaviours", "_calls", "_context", "_lock", "_name", "_sequence", "_signatures", "_spec")

    def __init__(
        self,
        spec: type | None = None,
        *,
        name: str | None = None,
        context: QueryContext | None = None,
        sequence: SequenceNumberGenerator | None = None,
    ) -> None:
        """Initialize substitute.

        Args:
            spec: Type whose members may be called. None = any member.
                Parameter annotations become declared argument types.
            name: Label used in diagnostics. Defaults to spec name.
            context: Query context to register expectations in.
                None = default context at call time.
            sequence: Sequence source. None = process-wide generator.
        """
        self._spec = spec
        self._name = name or (spec.__name__ if spec is not None else "Substitute")
        self._context = context
        self._sequence = sequence or GLOBAL_SEQUENCE
        self._calls: list[Call] = []
        self._behaviours: dict[str, _Behaviour] = {}
        self._signatures: dict[str, _Introspection | None] = {}
        self._lock = threading.Lock()

    def __getattr__(self, member: str) -> object:
        if member.startswith("_"):
            raise AttributeError(member)
        if self._spec is not None:
            if not hasattr(self._spec, member):
                raise UnknownMemberError(self._spec.__name__, member)
            if isinstance(inspect.getattr_static(self._spec, member, None), property):
                # Getters are not calls: never recorded, never part of a query
                return self._behaviours.get(member, _DEFAULT_BEHAVIOUR).returns
        return _RecordingMethod(self, member)

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"<Substitute {self._name}>"

    def received_calls(self) -> tuple[Call, ...]:
        """All recorded calls, chronological."""
        with self._lock:
            return tuple(self._calls)

    def clear_received_calls(self) -> None:
        """Forget recorded calls. Sequence numbers are not reused."""
        with self._lock:
            self._calls.clear()

    def configure(
        self,
        member: str,
        *,
        returns: object = None,
        raises: BaseException | None = None,
    ) -> None:
        """Set what a member returns (or raises) when called.

        Args:
            member: Member name.
            returns: Value returned by recorded calls.
            raises: Exception raised by recorded calls instead of returning.

        Raises:
            UnknownMemberError: spec has no such member.
        """
        if self._spec is not None and not hasattr(self._spec, member):
            raise UnknownMemberError(self._spec.__name__, member)
        self._behaviours[member] = _Behaviour(returns=returns, raises=raises)

    def _resolve_context(self) -> QueryContext:
        return self._context if self._context is not None else default_context()

    def _invoke(self, member: str, args: tuple[object, ...], kwargs: dict[str, object]) -> object:
        """Declare an expectation while recording, else record the call.

        Raises:
            TypeError: Arguments do not fit the spec signature.
        """
        args, kwargs = self._canonical_arguments(member, args, kwargs)
        context = self._resolve_context()
        if context.is_querying:
            context.add_to_query(self, self._build_specification(member, args, kwargs))
            return None

        with self._lock:
            call = Call(
                target=self,
                method=member,
                sequence_number=self._sequence.next(),
                args=args,
                kwargs=kwargs,
            )
            self._calls.append(call)

        behaviour = self._behaviours.get(member, _DEFAULT_BEHAVIOUR)
        if behaviour.raises is not None:
            raise behaviour.raises
        return behaviour.returns

    def _canonical_arguments(
        self,
        member: str,
        args: tuple[object, ...],
        kwargs: dict[str, object],
    ) -> tuple[tuple[object, ...], dict[str, object]]:
        """Arguments as the spec signature binds them, positional where possible.

        save(1) and save(row=1) both become ((1,), {}), so received calls and
        declared expectations compare alike. Unchanged without spec.

        Raises:
            TypeError: Arguments do not fit the spec signature.
        """
        introspection = self._introspect(member)
        if introspection is None:
            return args, kwargs
        bound = introspection.signature.bind(*args, **kwargs)
        return bound.args, dict(bound.kwargs)

    def _build_specification(
        self,
        member: str,
        args: tuple[object, ...],
        kwargs: dict[str, object],
    ) -> CallSpecification:
        """Matchers from call-expression arguments, typed by spec annotations."""
        arg_types, kwarg_types = self._parameter_types(member, args, kwargs)
        return CallSpecification(
            target=self,
            method=member,
            args=tuple(
                ArgumentSpecification(as_matcher(value), for_type)
                for value, for_type in zip(args, arg_types, strict=True)
            ),
            kwargs={
                name: ArgumentSpecification(as_matcher(value), kwarg_types[name])
                for name, value in kwargs.items()
            },
        )

    def _parameter_types(
        self,
        member: str,
        args: tuple[object, ...],
        kwargs: dict[str, object],
    ) -> tuple[tuple[object | None, ...], dict[str, object | None]]:
        """Declared parameter types from spec. All None without spec."""
        introspection = self._introspect(member)
        if introspection is None:
            return (None,) * len(args), dict.fromkeys(kwargs)
        return _declared_types(introspection.signature, introspection.hints, args, kwargs)

    def _introspect(self, member: str) -> _Introspection | None:
        """Signature (without `self`) and annotations of a spec member, cached.

        None without spec, for non-callable members, and for builtins
        without introspectable signature.
        """
        if member in self._signatures:
            return self._signatures[member]

        introspection: _Introspection | None = None
        function = getattr(self._spec, member) if self._spec is not None else None
        if callable(function):
            try:
                signature = inspect.signature(function)
            except (TypeError, ValueError):
                signature = None
            if signature is not None:
                if inspect.isfunction(inspect.getattr_static(self._spec, member)):
                    # Plain method looked up on the class: drop `self`
                    signature = signature.replace(parameters=list(signature.parameters.values())[1:])
                try:
                    hints = typing.get_type_hints(function)
                except NameError:
                    # Unresolvable forward reference: treat as undeclared
                    hints = {}
                introspection = _Introspection(signature, hints)

        self._signatures[member] = introspection
        return introspection
