"""Fluent API: declare expected calls inside a scope, then verify them.

Example:
    repo = Substitute(Repository)
    service.sync(repo)

    received_in_order(lambda: (
        repo.open("db"),
        repo.save(match(lambda row: assert_valid(row), of_type=Row)),
        repo.close(),
    ))

Every function accepts an optional QueryContext. None = default context.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar, cast

from seqcheck.application.matching.matchers import AnyMatcher, AssertionMatcher
from seqcheck.application.query.context import default_context
from seqcheck.domain.exceptions import EmptyQueryError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from seqcheck.application.query.context import QueryContext, QueryScope
    from seqcheck.application.query.query import Query

_T = TypeVar("_T")


def _context(context: QueryContext | None) -> QueryContext:
    return context if context is not None else default_context()


def _declared(query: Query) -> Query:
    """FAIL-FIRST: an empty query would verify vacuously."""
    if len(query) == 0:
        raise EmptyQueryError
    return query


def match(assertion: Callable[[_T], object], of_type: type[_T] | None = None) -> _T:
    """Matcher placeholder for a substitute call expression.

    The assertion signals a mismatch by raising (AssertionError by default),
    like a plain `assert` statement. Arguments not compatible with
    `of_type` never reach the assertion.

    Args:
        assertion: Routine checking one argument value.
        of_type: Expected argument type. None = any type.

    Returns:
        Placeholder typed as the argument, to pass in place of a real value.

    Raises:
        InvalidMatcherError: assertion is not callable.
    """
    return cast("_T", AssertionMatcher(assertion, of_type))


def any_arg(of_type: type[_T] | None = None) -> _T:
    """Wildcard placeholder matching any argument compatible with of_type."""
    return cast("_T", AnyMatcher(of_type))


def enter_scope(context: QueryContext | None = None) -> QueryScope:
    """Open a recording window or join the active one.

    Usage:
        with enter_scope() as scope:
            repo.save(1)
        scope.query.verify_exact_order()
    """
    return _context(context).enter_scope()


def run_in_scope(callback: Callable[[], object], context: QueryContext | None = None) -> Query:
    """Run callback in an exclusive recording window.

    Raises:
        NestedQueryError: A window is already active.
        AsyncCallbackError: Callback returned an awaitable.
    """
    return _context(context).run_in_scope(callback)


async def arun_in_scope(
    callback: Callable[[], Awaitable[object]],
    context: QueryContext | None = None,
) -> Query:
    """Await callback in an exclusive recording window.

    Raises:
        NestedQueryError: A window is already active.
    """
    return await _context(context).arun_in_scope(callback)


def verify_exact_order(query: Query) -> None:
    """Raise SequenceNotFoundError unless calls follow query in exact order."""
    query.verify_exact_order()


def verify_any_order(query: Query) -> None:
    """Raise SequenceNotFoundError unless every specification has its own call."""
    query.verify_any_order()


def received_in_order(calls: Callable[[], object], context: QueryContext | None = None) -> None:
    """Record expected calls and verify them in exact order.

    Raises:
        NestedQueryError: A window is already active.
        EmptyQueryError: Callback declared no expected calls.
        SequenceNotFoundError: Calls do not match.
    """
    _declared(run_in_scope(calls, context)).verify_exact_order()


def received_in_any_order(calls: Callable[[], object], context: QueryContext | None = None) -> None:
    """Record expected calls and verify them in any order.

    Raises:
        NestedQueryError: A window is already active.
        EmptyQueryError: Callback declared no expected calls.
        SequenceNotFoundError: A specification has no matching call.
    """
    _declared(run_in_scope(calls, context)).verify_any_order()


async def areceived_in_order(
    calls: Callable[[], Awaitable[object]],
    context: QueryContext | None = None,
) -> None:
    """Suspend-aware received_in_order()."""
    _declared(await arun_in_scope(calls, context)).verify_exact_order()


async def areceived_in_any_order(
    calls: Callable[[], Awaitable[object]],
    context: QueryContext | None = None,
) -> None:
    """Suspend-aware received_in_any_order()."""
    _declared(await arun_in_scope(calls, context)).verify_any_order()
