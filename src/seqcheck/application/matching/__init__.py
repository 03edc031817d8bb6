"""Argument matchers."""

from seqcheck.application.matching.matchers import (
    ANY,
    AnyMatcher,
    AssertionMatcher,
    EqualityMatcher,
    MATCHER_TYPES,
    as_matcher,
)

__all__ = [
    "ANY",
    "AnyMatcher",
    "AssertionMatcher",
    "EqualityMatcher",
    "MATCHER_TYPES",
    "as_matcher",
]
