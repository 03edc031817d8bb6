"""Tests for the fluent API.

End-to-end scenarios over Substitute + QueryContext:
- exact order over one and several targets
- any order with consumption
- assertion-style matchers via match()
- scope re-entry and nesting
"""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Callable

import pytest

from seqcheck import (
    ANY,
    AsyncCallbackError,
    EmptyQueryError,
    NestedQueryError,
    QueryContext,
    SequenceNotFoundError,
    Substitute,
    any_arg,
    areceived_in_any_order,
    areceived_in_order,
    enter_scope,
    match,
    received_in_any_order,
    received_in_order,
    run_in_scope,
    verify_any_order,
    verify_exact_order,
)
from seqcheck.application.matching.matchers import AnyMatcher, AssertionMatcher
from seqcheck.infrastructure.sequence import SequenceNumberGenerator
from tests.factories import contains

MakeSubstitute = Callable[..., Substitute]


class Comparable:
    """Collaborator type with one comparison member."""

    def compare_to(self, other: object) -> int: ...


class Speaker:
    """Collaborator type taking strings."""

    def say(self, text: str) -> None: ...


@pytest.fixture
def context() -> QueryContext:
    return QueryContext()


@pytest.fixture
def make(context: QueryContext) -> MakeSubstitute:
    sequence = SequenceNumberGenerator()

    def _make(spec: type | None = None, name: str | None = None) -> Substitute:
        return Substitute(spec, name=name, context=context, sequence=sequence)

    return _make


class TestMatchPlaceholders:
    """match() and any_arg()."""

    def test_match_returns_assertion_matcher(self) -> None:
        """Placeholder carries assertion and type."""
        placeholder = match(contains("yo"), str)
        assert isinstance(placeholder, AssertionMatcher)
        assert placeholder.for_type is str

    def test_any_arg(self) -> None:
        """Typed wildcard."""
        placeholder = any_arg(int)
        assert isinstance(placeholder, AnyMatcher)
        assert placeholder.for_type is int


class TestExactOrder:
    """received_in_order scenarios."""

    def test_same_order_passes(self, make: MakeSubstitute, context: QueryContext) -> None:
        """cmp(a), cmp(b) recorded and expected."""
        a = make(Comparable, "a")
        b = make(Comparable, "b")
        first = make(Comparable, "first")
        first.compare_to(a)
        first.compare_to(b)

        received_in_order(lambda: (first.compare_to(a), first.compare_to(b)), context)

    def test_swapped_order_fails(self, make: MakeSubstitute, context: QueryContext) -> None:
        """cmp(b), cmp(a) recorded, cmp(a), cmp(b) expected."""
        a = make(Comparable, "a")
        b = make(Comparable, "b")
        first = make(Comparable, "first")
        first.compare_to(b)
        first.compare_to(a)

        with pytest.raises(SequenceNotFoundError):
            received_in_order(lambda: (first.compare_to(a), first.compare_to(b)), context)

    @pytest.mark.parametrize("permutation", list(itertools.permutations(range(3)))[1:])
    def test_non_identity_permutation_fails(
        self,
        make: MakeSubstitute,
        context: QueryContext,
        permutation: tuple[int, ...],
    ) -> None:
        """Only the recorded order matches."""
        target = make(name="target")
        for value in range(3):
            target.f(value)

        with pytest.raises(SequenceNotFoundError):
            received_in_order(lambda: [target.f(value) for value in permutation], context)

    def test_interleaved_targets_merged_by_time(self, make: MakeSubstitute, context: QueryContext) -> None:
        """a.open, b.open, a.close must be expected in that order."""
        a = make(name="a")
        b = make(name="b")
        a.open()
        b.open()
        a.close()

        received_in_order(lambda: (a.open(), b.open(), a.close()), context)
        with pytest.raises(SequenceNotFoundError):
            received_in_order(lambda: (a.open(), a.close(), b.open()), context)

    def test_assertion_failure_text_surfaced(self, make: MakeSubstitute, context: QueryContext) -> None:
        """Commit path reports the matcher failure."""
        speaker = make(Speaker)
        speaker.say("djir")

        with pytest.raises(SequenceNotFoundError, match="Expected 'djir' to contain 'yo'"):
            received_in_order(lambda: speaker.say(match(contains("yo"))), context)

    def test_declared_type_mismatch_skips_assertion(self, make: MakeSubstitute, context: QueryContext) -> None:
        """Non-str argument never reaches the str assertion."""
        speaker = make(Speaker)
        speaker.say(42)

        with pytest.raises(SequenceNotFoundError) as exc_info:
            received_in_order(lambda: speaker.say(match(contains("yo"))), context)

        assert exc_info.value.failure_message is None

    def test_diagnostic_numbers_same_label(self, make: MakeSubstitute, context: QueryContext) -> None:
        """Two instances labelled alike are told apart."""
        first = make(name="repo")
        second = make(name="repo")
        first.save()
        second.save()

        with pytest.raises(SequenceNotFoundError) as exc_info:
            received_in_order(lambda: (second.save(), first.save()), context)

        message = str(exc_info.value)
        assert "1@repo.save()" in message
        assert "2@repo.save()" in message


class TestAnyOrder:
    """received_in_any_order scenarios."""

    @pytest.mark.parametrize("permutation", list(itertools.permutations(range(3))))
    def test_any_permutation_passes(
        self,
        make: MakeSubstitute,
        context: QueryContext,
        permutation: tuple[int, ...],
    ) -> None:
        """Same multiset of calls in any order."""
        target = make(name="target")
        for value in range(3):
            target.f(value)

        received_in_any_order(lambda: [target.f(value) for value in permutation], context)

    def test_duplicate_call_not_reused(self, make: MakeSubstitute, context: QueryContext) -> None:
        """f(1), f(1) received, f(1), f(2) expected."""
        target = make(name="target")
        target.f(1)
        target.f(1)

        with pytest.raises(SequenceNotFoundError, match=r"Could not find a match for:\n    target.f\(2\)"):
            received_in_any_order(lambda: (target.f(1), target.f(2)), context)

    def test_probe_skips_failing_candidate(self, make: MakeSubstitute, context: QueryContext) -> None:
        """'djir' probed silently, 'yoyo' matches."""
        speaker = make(Speaker)
        speaker.say("djir")
        speaker.say("yoyo")

        received_in_any_order(lambda: speaker.say(match(contains("yo"), str)), context)

    def test_wildcards(self, make: MakeSubstitute, context: QueryContext) -> None:
        """ANY and any_arg()."""
        speaker = make(Speaker)
        speaker.say("hello")

        received_in_any_order(lambda: speaker.say(ANY), context)
        received_in_any_order(lambda: speaker.say(any_arg(str)), context)


class TestScopes:
    """enter_scope / run_in_scope semantics."""

    def test_reentry_is_noop(self, make: MakeSubstitute, context: QueryContext) -> None:
        """Closing inner handle keeps outer window open."""
        target = make(name="target")
        target.open()
        target.close()

        with enter_scope(context) as outer:
            target.open()
            with enter_scope(context):
                pass
            assert context.is_querying
            target.close()

        verify_exact_order(outer.query)
        verify_any_order(outer.query)

    def test_run_in_scope_while_active_raises(self, context: QueryContext) -> None:
        """Exclusive form refuses nesting."""
        with enter_scope(context), pytest.raises(NestedQueryError):
            run_in_scope(lambda: None, context)

    def test_nested_received_in_order_raises(self, make: MakeSubstitute, context: QueryContext) -> None:
        """Verification inside a declaring callback."""
        target = make(name="target")

        with pytest.raises(NestedQueryError):
            received_in_order(lambda: received_in_order(lambda: target.f(), context), context)

    def test_async_callback_to_sync_runner(self, context: QueryContext) -> None:
        """Coroutine functions need the async variant."""

        async def declare() -> None:
            pass

        with pytest.raises(AsyncCallbackError):
            received_in_order(declare, context)

    def test_outside_scope_calls_are_recorded(self, make: MakeSubstitute, context: QueryContext) -> None:
        """Without a window the substitute records."""
        target = make(name="target")
        target.f(1)

        assert not context.is_querying
        assert len(target.received_calls()) == 1


class TestAsyncVariants:
    """Suspend-aware verification."""

    def test_areceived_in_order(self, make: MakeSubstitute, context: QueryContext) -> None:
        """Expectations declared across await points."""
        target = make(name="target")
        target.open()
        target.close()

        async def declare() -> None:
            target.open()
            await asyncio.sleep(0)
            target.close()

        asyncio.run(areceived_in_order(declare, context))

    def test_areceived_in_any_order_fails(self, make: MakeSubstitute, context: QueryContext) -> None:
        """Missing call detected after suspension."""
        target = make(name="target")
        target.open()

        async def declare() -> None:
            await asyncio.sleep(0)
            target.close()

        with pytest.raises(SequenceNotFoundError):
            asyncio.run(areceived_in_any_order(declare, context))

    def test_concurrent_verifications_isolated(self, make: MakeSubstitute, context: QueryContext) -> None:
        """Two tasks verifying at once never share a window."""
        a = make(name="a")
        b = make(name="b")
        a.f()
        b.g()

        async def verify(target: Substitute, member: str) -> None:
            async def declare() -> None:
                await asyncio.sleep(0)
                getattr(target, member)()
                await asyncio.sleep(0)

            await areceived_in_order(declare, context)

        async def main() -> None:
            await asyncio.gather(verify(a, "f"), verify(b, "g"))

        asyncio.run(main())


class TestEmptyDeclaration:
    """Callbacks that declare nothing are rejected."""

    @pytest.fixture
    def stranger(self) -> Substitute:
        """Substitute bound to a context other than the verifying one."""
        return Substitute(name="repo", context=QueryContext())

    def test_callback_without_calls(self, context: QueryContext) -> None:
        """Nothing declared."""
        with pytest.raises(EmptyQueryError):
            received_in_order(lambda: None, context)

    def test_substitute_of_other_context_in_order(self, stranger: Substitute, context: QueryContext) -> None:
        """Call is recorded on the substitute instead of declared."""
        with pytest.raises(EmptyQueryError):
            received_in_order(lambda: stranger.save(2), context)

        assert len(stranger.received_calls()) == 1

    def test_substitute_of_other_context_any_order(self, stranger: Substitute, context: QueryContext) -> None:
        """Same for any order."""
        with pytest.raises(EmptyQueryError):
            received_in_any_order(lambda: stranger.save(2), context)

    def test_substitute_of_other_context_async(self, stranger: Substitute, context: QueryContext) -> None:
        """Async variants check too."""

        async def declare() -> None:
            await asyncio.sleep(0)
            stranger.save(2)

        with pytest.raises(EmptyQueryError):
            asyncio.run(areceived_in_order(declare, context))
        with pytest.raises(EmptyQueryError):
            asyncio.run(areceived_in_any_order(declare, context))

    def test_verify_accepts_empty_query(self, context: QueryContext) -> None:
        """Lower-level verification still passes on an empty query."""
        verify_exact_order(run_in_scope(lambda: None, context))
