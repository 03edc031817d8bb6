"""Received call value object."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True, eq=False)
class Call:
    """One invocation received by a target.

    Immutable once recorded. Identity-compared: two calls are never equal
    unless they are the same object (sequence numbers are unique anyway).

    Attributes:
        target: Target that received the call (compared by identity)
        method: Name of the invoked member
        sequence_number: Process-wide, strictly increasing capture order
        args: Positional argument values
        kwargs: Keyword argument values (read-only view)
    """

    target: object
    method: str
    sequence_number: int
    args: tuple[object, ...] = ()
    kwargs: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.target is None:
            raise TypeError("target must not be None")
        if not self.method:
            raise ValueError("method must not be empty")
        if self.sequence_number < 0:
            raise ValueError(f"sequence_number must be >= 0, got {self.sequence_number}")
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))
        if not isinstance(self.kwargs, MappingProxyType):
            object.__setattr__(self, "kwargs", MappingProxyType(dict(self.kwargs)))
