"""Tests for any-order verification.

Tests:
- Per-target grouping
- First-match consumption (each call used at most once)
- Probe mode: failing candidates skipped, last text reported
"""

import pytest

from seqcheck.application.matching.matchers import AssertionMatcher
from seqcheck.application.verification.any_order import group_by_target, verify_any_order
from seqcheck.domain.exceptions import SequenceNotFoundError, UnexpectedMatcherError
from seqcheck.domain.model.configuration import VerificationConfig
from tests.factories import FakeTarget, contains, make_spec

DEFAULT = VerificationConfig()


class TestGroupByTarget:
    """Tests for group_by_target."""

    def test_groups_keep_relative_order(self) -> None:
        """Specs grouped per target identity, order preserved."""
        a = FakeTarget("a")
        b = FakeTarget("b")
        a1 = make_spec(a, "one")
        b1 = make_spec(b, "one")
        a2 = make_spec(a, "two")

        assert group_by_target((a1, b1, a2)) == [(a, [a1, a2]), (b, [b1])]


class TestAnyOrderMatching:
    """Matching scenarios."""

    def test_reordered_calls_match(self) -> None:
        """f(2), f(1) received, f(1), f(2) expected."""
        a = FakeTarget()
        a.call("f", 2)
        a.call("f", 1)

        verify_any_order((make_spec(a, "f", 1), make_spec(a, "f", 2)), DEFAULT)

    def test_failing_candidate_skipped(self) -> None:
        """'djir' rejected in probe mode, 'yoyo' matches."""
        a = FakeTarget()
        a.call("say", "djir")
        a.call("say", "yoyo")

        verify_any_order((make_spec(a, "say", AssertionMatcher(contains("yo"))),), DEFAULT)

    def test_targets_independent(self) -> None:
        """Interleaving across targets irrelevant."""
        a = FakeTarget("a")
        b = FakeTarget("b")
        b.call("close")
        a.call("open")

        verify_any_order((make_spec(a, "open"), make_spec(b, "close")), DEFAULT)

    def test_surplus_calls_allowed(self) -> None:
        """Unconsumed calls are not an error."""
        a = FakeTarget()
        a.call("f", 1)
        a.call("f", 2)

        verify_any_order((make_spec(a, "f", 2),), DEFAULT)


class TestAnyOrderMismatch:
    """Failing scenarios."""

    def test_call_consumed_once(self) -> None:
        """One f(1) cannot satisfy two f(1) specifications."""
        a = FakeTarget()
        a.call("f", 1)
        second = make_spec(a, "f", 1)

        with pytest.raises(SequenceNotFoundError) as exc_info:
            verify_any_order((make_spec(a, "f", 1), second), DEFAULT)

        assert exc_info.value.unmatched is second
        assert exc_info.value.actual == ()

    def test_reports_remaining_calls(self) -> None:
        """Unconsumed calls of the target attached and listed."""
        a = FakeTarget("repo")
        remaining = a.call("f", 2)

        with pytest.raises(SequenceNotFoundError) as exc_info:
            verify_any_order((make_spec(a, "f", 1),), DEFAULT)

        assert exc_info.value.actual == (remaining,)
        assert "Remaining unmatched calls to repo:" in str(exc_info.value)
        assert "repo.f(2)" in str(exc_info.value)

    def test_last_rejected_failure_reported(self) -> None:
        """Text of the last rejected candidate embedded."""
        a = FakeTarget()
        a.call("say", "djir")
        a.call("say", "nope")

        with pytest.raises(SequenceNotFoundError) as exc_info:
            verify_any_order((make_spec(a, "say", AssertionMatcher(contains("yo"))),), DEFAULT)

        assert exc_info.value.failure_message == "Expected 'nope' to contain 'yo'"

    def test_structural_mismatch_has_no_failure_text(self) -> None:
        """No matcher ran: no assertion failure section."""
        a = FakeTarget()
        a.call("open")

        with pytest.raises(SequenceNotFoundError) as exc_info:
            verify_any_order((make_spec(a, "close"),), DEFAULT)

        assert exc_info.value.failure_message is None
        assert "Assertion failure" not in str(exc_info.value)

    def test_unexpected_matcher_error_propagates(self) -> None:
        """Unrecognized exception aborts probing."""
        a = FakeTarget()
        a.call("say", 42)

        with pytest.raises(UnexpectedMatcherError):
            verify_any_order((make_spec(a, "say", AssertionMatcher(contains("yo"))),), DEFAULT)

    def test_matcher_failure_kept_past_structural_rejection(self) -> None:
        """Later candidate rejected on member name keeps earlier failure text."""
        a = FakeTarget()
        a.call("say", "djir")
        a.call("other")

        with pytest.raises(SequenceNotFoundError) as exc_info:
            verify_any_order((make_spec(a, "say", AssertionMatcher(contains("yo"))),), DEFAULT)

        assert exc_info.value.failure_message == "Expected 'djir' to contain 'yo'"
        assert "Assertion failure:\nExpected 'djir' to contain 'yo'" in str(exc_info.value)
