"""QueryContext: flow-local recording window.

The active Query lives in a contextvars.ContextVar owned by the context
instance. asyncio tasks copy the current Context at creation, so:
- code after an `await` in the same task sees the same Query
- child tasks created inside the scope inherit it
- sibling tasks and other threads never see it

Contracts:
    - FAIL-FIRST: NestedQueryError if run_in_scope() while recording
    - Teardown always runs (try/finally), Query finalized on exit
    - Only the scope that installed the window tears it down
"""

from __future__ import annotations

import contextvars
import inspect
import logging
from typing import TYPE_CHECKING

from seqcheck.application.query.query import Query
from seqcheck.domain.exceptions import AsyncCallbackError, NestedQueryError, NotRecordingError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from types import TracebackType

    from seqcheck.domain.model.call_specification import CallSpecification
    from seqcheck.domain.model.configuration import VerificationConfig

logger = logging.getLogger(__name__)


class QueryScope:
    """Handle for one enter_scope() call.

    Owning scope: installed the window, close() finalizes the Query and
    restores the previous ContextVar state.
    Non-owning scope: re-entry into an already active window, close() is a no-op.
    close() runs at most once.
    """

    __slots__ = ("_closed", "_owns_window", "_query", "_token", "_var")

    def __init__(
        self,
        query: Query,
        var: contextvars.ContextVar[Query | None] | None = None,
        token: contextvars.Token[Query | None] | None = None,
    ) -> None:
        """Initialize scope.

        Args:
            query: Query in effect for this scope.
            var: ContextVar holding the window. None = non-owning scope.
            token: Token returned when the window was installed.
        """
        self._query = query
        self._var = var
        self._token = token
        self._owns_window = var is not None
        self._closed = False

    @property
    def query(self) -> Query:
        """Query recorded by this scope (the outer one when re-entered)."""
        return self._query

    @property
    def owns_window(self) -> bool:
        """Check if this scope installed the window."""
        return self._owns_window

    @property
    def closed(self) -> bool:
        """Check if close() already ran."""
        return self._closed

    def close(self) -> None:
        """Tear down the window if owned. Idempotent."""
        if self._closed:
            return
        self._closed = True

        if self._var is None or self._token is None:
            return

        self._query.finalize()
        try:
            self._var.reset(self._token)
        except ValueError:
            # Token created in another Context (scope closed from a different task).
            # The owning flow keeps the finalized Query, which no longer counts as active.
            self._var.set(None)
            logger.warning("query scope closed outside the flow that opened it: %r", self._query)
        logger.debug("query scope exited: %r", self._query)

    def __enter__(self) -> QueryScope:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class QueryContext:
    """Recording-window manager. Injectable, one ContextVar per instance.

    Lifecycle:
        context = QueryContext()
        query = context.run_in_scope(lambda: declare_expectations())
        query.verify_exact_order()
    """

    __slots__ = ("_active", "_config")

    def __init__(self, config: VerificationConfig | None = None) -> None:
        """Initialize context.

        Args:
            config: Configuration for queries recorded here. Uses defaults if None.
        """
        self._config = config
        self._active: contextvars.ContextVar[Query | None] = contextvars.ContextVar(
            "seqcheck_active_query",
            default=None,
        )

    @property
    def config(self) -> VerificationConfig | None:
        """Configuration passed to new queries."""
        return self._config

    @property
    def is_querying(self) -> bool:
        """Check if a window is active in the current flow."""
        return self._current() is not None

    @property
    def current_query(self) -> Query | None:
        """Active Query of the current flow, None if not recording."""
        return self._current()

    def _current(self) -> Query | None:
        """Installed Query unless already finalized (window closed elsewhere)."""
        query = self._active.get()
        if query is None or query.is_finalized:
            return None
        return query

    def enter_scope(self) -> QueryScope:
        """Open a window, or join the active one.

        Returns:
            Owning scope if no window was active, no-op scope otherwise.
        """
        active = self._current()
        if active is not None:
            return QueryScope(active)

        query = Query(self._config)
        token = self._active.set(query)
        logger.debug("query scope entered")
        return QueryScope(query, self._active, token)

    def run_in_scope(self, callback: Callable[[], object]) -> Query:
        """Run callback in a fresh window.

        Args:
            callback: Zero-argument callable declaring expected calls.

        Returns:
            Finalized Query.

        Raises:
            NestedQueryError: A window is already active.
            AsyncCallbackError: Callback returned an awaitable.
        """
        scope = self._open_exclusive()
        try:
            result = callback()
            if inspect.isawaitable(result):
                if inspect.iscoroutine(result):
                    result.close()
                raise AsyncCallbackError
        finally:
            scope.close()
        return scope.query

    async def arun_in_scope(self, callback: Callable[[], Awaitable[object]]) -> Query:
        """Run callback in a fresh window, awaiting it to completion.

        Calls made after suspension points of the callback still land in
        the same Query.

        Args:
            callback: Zero-argument coroutine function declaring expected calls.

        Returns:
            Finalized Query.

        Raises:
            NestedQueryError: A window is already active.
        """
        scope = self._open_exclusive()
        try:
            await callback()
        finally:
            scope.close()
        return scope.query

    def add_to_query(self, target: object, specification: CallSpecification) -> None:
        """Route an expectation into the active window.

        Raises:
            NotRecordingError: No window active.
            ValueError: Specification addresses a different target.
        """
        query = self._current()
        if query is None:
            raise NotRecordingError
        if specification.target is not target:
            raise ValueError("specification.target must be the registering target")
        query.add(specification)

    def _open_exclusive(self) -> QueryScope:
        """FAIL-FIRST: raise if already recording, else open owning scope."""
        if self.is_querying:
            raise NestedQueryError
        return self.enter_scope()


_DEFAULT_CONTEXT = QueryContext()


def default_context() -> QueryContext:
    """Process-wide default context, used when none is injected."""
    return _DEFAULT_CONTEXT
