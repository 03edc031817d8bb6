"""Domain ports: contracts for collaborators."""

from seqcheck.domain.ports.matcher import ArgumentMatcher
from seqcheck.domain.ports.target import Target

__all__ = [
    "ArgumentMatcher",
    "Target",
]
